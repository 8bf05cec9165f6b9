from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeSource
from happydata.main import app
from happydata.providers.wb_provider import WorldBankClient, WorldBankTransportError
from happydata.routes.dashboard import get_config, get_source
from happydata.services.catalog import year_options
from happydata.services.records import Observation


@pytest.fixture
def client_for(small_config):
    def _make(source):
        app.dependency_overrides[get_source] = lambda: source
        app.dependency_overrides[get_config] = lambda: small_config
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_healthz():
    assert TestClient(app).get("/healthz").json() == {"status": "ok"}


def test_options(client_for):
    body = client_for(FakeSource()).get("/v1/options").json()
    assert body["indicators"] == [{"value": "NY.GDP.PCAP.CD", "label": "GDP per capita (current US$)"}]
    assert body["regions"] == [{"value": "NAC", "label": "North America"}]
    assert len(body["years"]) == 25
    assert body["defaults"]["country"] == "USA"
    assert body["defaults"]["year"] == year_options()[1]


def test_year_options_window():
    years = year_options(date(2025, 3, 1))
    assert years[0] == "2024"
    assert years[-1] == "2000"
    assert len(years) == 25


def test_countries(client_for, north_america):
    r = client_for(FakeSource(countries=north_america)).get("/v1/countries")
    assert r.status_code == 200
    assert [c["value"] for c in r.json()["countries"]] == ["USA", "CAN", "BMU"]


def test_country_view_accepts_country_name(client_for, north_america):
    source = FakeSource(countries=north_america, series=[Observation("CAN", "2018", 46000.0)])
    r = client_for(source).get("/v1/country-view", params={"country": "Canada", "start": "2015", "end": "2020"})
    assert r.status_code == 200
    body = r.json()
    assert body["country"] == "CAN"
    assert body["rows"][0] == {"year": "2018", "value": 46000.0, "happiness_score": 7.33}
    assert ("series", "CAN", "NY.GDP.PCAP.CD", "2015", "2020") in source.calls


def test_country_view_defaults(client_for, north_america):
    source = FakeSource(countries=north_america)
    body = client_for(source).get("/v1/country-view").json()
    assert body["country"] == "USA"
    assert body["indicator"] == "NY.GDP.PCAP.CD"


def test_country_view_invalid_country(client_for):
    r = client_for(FakeSource()).get("/v1/country-view", params={"country": "Nonexistent Country"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid country name"}


def test_country_view_rejects_bad_year(client_for):
    r = client_for(FakeSource()).get("/v1/country-view", params={"start": "20x0"})
    assert r.status_code == 422


def test_region_view_upstream_error(client_for):
    source = FakeSource(fail_with=WorldBankTransportError("API call failed"))
    r = client_for(source).get("/v1/region-view", params={"region": "NAC", "year": "2019"})
    assert r.status_code == 502
    assert r.json() == {"error": "Failed to fetch regional data. Please try again."}


def test_region_view_unknown_region(client_for):
    r = client_for(FakeSource()).get("/v1/region-view", params={"region": "ZZZ", "year": "2019"})
    assert r.status_code == 400
    assert r.json() == {"error": "Unknown region: ZZZ"}


def test_region_view_rows(client_for, north_america):
    source = FakeSource(
        region_countries={"NAC": north_america},
        region_observations=[Observation("CAN", "2019", 46000.0), Observation("USA", "2019", 65000.0)],
    )
    body = client_for(source).get("/v1/region-view", params={"region": "NAC", "year": "2019"}).json()
    assert [row["country"] for row in body["rows"]] == ["United States", "Canada"]
    assert body["empty"] is False


def test_countries_malformed_rows_return_user_message(client_for):
    def handler(request):
        return httpx.Response(200, json=[{}, ["oops"]])

    source = WorldBankClient(http=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    r = client_for(source).get("/v1/countries")
    assert r.status_code == 502
    assert r.json() == {"error": "Failed to fetch list of countries. Please try again later."}
