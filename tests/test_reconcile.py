from happydata.services.reconcile import (
    merge_series_row,
    present,
    reconcile_entity_series,
    reconcile_entity_snapshot,
)
from happydata.services.records import Entity, Observation, SeriesRow, SnapshotRow


def _obs(entity_id, year, value):
    return Observation(entity_id=entity_id, year=year, value=value)


def _ent(entity_id, name, region_iso2="XU"):
    return Entity(id=entity_id, name=name, region_id="X", region_iso2=region_iso2)


# -----------------------------------------------------------------------------
# country view
# -----------------------------------------------------------------------------

def test_series_empty_inputs():
    assert reconcile_entity_series([], []) == []


def test_series_value_without_score():
    rows = reconcile_entity_series([_obs("USA", "2015", 56000.0)], [])
    assert rows == [SeriesRow(year="2015", value=56000.0, happiness_score=None)]


def test_series_drops_absent_observations():
    rows = reconcile_entity_series([_obs("USA", "2015", None), _obs("USA", "2016", 1.0)], [])
    assert [r.year for r in rows] == ["2016"]


def test_series_merges_disjoint_fields_on_same_year():
    rows = reconcile_entity_series(
        [_obs("USA", "2018", 62000.0), _obs("USA", "2017", 60000.0)],
        [(2018, 6.89), (2019, 6.94)],
    )
    assert rows == [
        SeriesRow(year="2017", value=60000.0),
        SeriesRow(year="2018", value=62000.0, happiness_score=6.89),
        SeriesRow(year="2019", happiness_score=6.94),
    ]


def test_series_sorted_by_numeric_year():
    rows = reconcile_entity_series(
        [_obs("USA", "2020", 3.0), _obs("USA", "2018", 1.0), _obs("USA", "2019", 2.0)],
        [],
    )
    assert [r.year for r in rows] == ["2018", "2019", "2020"]


def test_series_numeric_not_lexical_order():
    rows = reconcile_entity_series([_obs("X", "10000", 1.0), _obs("X", "999", 2.0)], [])
    assert [r.year for r in rows] == ["999", "10000"]


def test_series_independent_of_source_order():
    observations = [_obs("FIN", "2019", 48000.0), _obs("FIN", "2018", 50000.0)]
    secondary = [(2019, 7.77), (2018, 7.63)]

    forward = reconcile_entity_series(observations, secondary)
    reversed_input = reconcile_entity_series(list(reversed(observations)), list(reversed(secondary)))
    assert forward == reversed_input


def test_merge_series_row_keeps_other_field():
    row = merge_series_row(None, "2018", value=1.5)
    row = merge_series_row(row, "2018", happiness_score=7.0)
    assert row == SeriesRow(year="2018", value=1.5, happiness_score=7.0)


def test_present_is_lazy():
    gen = present(iter([_obs("A", "2020", None), _obs("A", "2021", 1.0)]))
    assert next(gen).year == "2021"


# -----------------------------------------------------------------------------
# region view
# -----------------------------------------------------------------------------

def test_snapshot_ignores_unknown_entities():
    rows = reconcile_entity_snapshot(
        [_ent("AAA", "Alpha")],
        [_obs("AAA", "2021", 5.0), _obs("ZZZ", "2021", 99.0)],
        {"ZZZ": [(2021, 7.0)]},
        "2021",
    )
    assert rows == [SnapshotRow(country="Alpha", indicator_value=5.0)]


def test_snapshot_drops_entities_without_data():
    entities = [_ent("AAA", "Alpha"), _ent("BBB", "Beta"), _ent("CCC", "Gamma")]
    rows = reconcile_entity_snapshot(
        entities,
        [_obs("AAA", "2021", 5.0)],
        {"BBB": [(2020, 6.0), (2021, 6.5)]},
        "2021",
    )
    assert len(rows) == 2
    assert {r.country for r in rows} == {"Alpha", "Beta"}


def test_snapshot_absent_value_sorts_as_zero():
    entities = [_ent("A", "A"), _ent("B", "B"), _ent("C", "C")]
    rows = reconcile_entity_snapshot(
        entities,
        [_obs("A", "2021", 10.0), _obs("C", "2021", 5.0)],
        {"B": [(2021, 6.0)]},
        "2021",
    )
    assert [r.country for r in rows] == ["A", "C", "B"]
    # absent stays absent in the output
    assert rows[-1].indicator_value is None


def test_snapshot_excludes_aggregates():
    entities = [_ent("USA", "United States"), _ent("NAC", "North America", region_iso2="NA")]
    rows = reconcile_entity_snapshot(
        entities,
        [_obs("USA", "2021", 70000.0), _obs("NAC", "2021", 65000.0)],
        {"NAC": [(2021, 7.0)]},
        "2021",
    )
    assert [r.country for r in rows] == ["United States"]


def test_snapshot_score_matches_year_as_string():
    rows = reconcile_entity_snapshot(
        [_ent("FIN", "Finland")],
        [],
        {"FIN": [(2018, 7.63), (2019, 7.77)]},
        "2019",
    )
    assert rows == [SnapshotRow(country="Finland", happiness_score=7.77)]


def test_snapshot_null_observation_does_not_clear_value():
    rows = reconcile_entity_snapshot(
        [_ent("A", "A")],
        [_obs("A", "2021", 3.0), _obs("A", "2021", None)],
        {},
        "2021",
    )
    assert rows[0].indicator_value == 3.0
