# happydata/services/reconcile.py — merge WB observations with bundled happiness scores
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple
import logging

from happydata.services.records import Entity, Observation, SeriesRow, SnapshotRow

logger = logging.getLogger("happydata.reconcile")

_UNSET: Any = object()


# -----------------------------------------------------------------------------
# shared helpers
# -----------------------------------------------------------------------------

def present(observations: Iterable[Observation]) -> Iterator[Observation]:
    """Lazily yield only observations that carry a value."""
    return (o for o in observations if o.value is not None)


def year_sort_key(row: SeriesRow) -> int:
    try:
        return int(row.year)
    except (TypeError, ValueError):
        return 0


def indicator_sort_key(row: SnapshotRow) -> float:
    # absent values rank as 0 for ordering only; the row keeps None
    return row.indicator_value if row.indicator_value is not None else 0.0


def merge_series_row(
    existing: Optional[SeriesRow],
    year: str,
    *,
    value: Optional[float] = _UNSET,
    happiness_score: Optional[float] = _UNSET,
) -> SeriesRow:
    """Return `existing` (or a fresh row for `year`) with the given fields set."""
    row = existing or SeriesRow(year=year)
    changes: Dict[str, Any] = {}
    if value is not _UNSET:
        changes["value"] = value
    if happiness_score is not _UNSET:
        changes["happiness_score"] = happiness_score
    return replace(row, **changes) if changes else row


# -----------------------------------------------------------------------------
# country view: one entity, many years
# -----------------------------------------------------------------------------

def reconcile_entity_series(
    observations: Iterable[Observation],
    secondary: Iterable[Tuple[int, float]],
) -> List[SeriesRow]:
    """
    Union-merge indicator observations and happiness scores by year.

    Observations fill `value`, secondary pairs fill `happiness_score`; the two
    never overwrite each other. Rows come back ascending by numeric year.
    """
    by_year: Dict[str, SeriesRow] = {}

    for obs in present(observations):
        key = str(obs.year)
        by_year[key] = merge_series_row(by_year.get(key), key, value=obs.value)

    for year, score in secondary:
        key = str(year)
        by_year[key] = merge_series_row(by_year.get(key), key, happiness_score=score)

    return sorted((r for r in by_year.values() if r.year), key=year_sort_key)


# -----------------------------------------------------------------------------
# region view: many entities, one year
# -----------------------------------------------------------------------------

def _score_for_year(series: Sequence[Tuple[int, float]], year: str) -> Optional[float]:
    for y, score in series:
        if str(y) == str(year):
            return score
    return None


def reconcile_entity_snapshot(
    entities: Iterable[Entity],
    observations: Iterable[Observation],
    secondary_by_entity: Mapping[str, Sequence[Tuple[int, float]]],
    year: str,
) -> List[SnapshotRow]:
    """
    One row per non-aggregate entity that has an indicator value or a
    happiness score for `year`, sorted by indicator value, highest first.

    The entity list is the universe: observations for unknown ids are dropped
    and no row is ever built from observation or score data alone.
    """
    merged: Dict[str, SnapshotRow] = {}
    for ent in entities:
        if ent.is_aggregate:
            continue
        merged[ent.id] = SnapshotRow(country=ent.name)

    for obs in present(observations):
        if obs.entity_id and obs.entity_id in merged:
            merged[obs.entity_id] = replace(merged[obs.entity_id], indicator_value=obs.value)

    for entity_id in merged:
        score = _score_for_year(secondary_by_entity.get(entity_id) or (), year)
        if score is not None:
            merged[entity_id] = replace(merged[entity_id], happiness_score=score)

    logger.debug("snapshot %s: merged before filtering: %s", year, merged)

    rows = sorted(
        (r for r in merged.values() if r.has_data),
        key=indicator_sort_key,
        reverse=True,
    )
    logger.debug("snapshot %s: %d of %d entities kept", year, len(rows), len(merged))
    return rows
