# ABOUTME: Name normalization and single-pass aggregation of scraped issues into a villain registry
# ABOUTME: Builds the canonical registry, the per-issue timeline and the corpus summary statistics

import re
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from villain_timeline.core.models import (
    AggregationResult,
    CanonicalVillain,
    CorpusSummary,
    ProcessedData,
    RawIssueRecord,
    RawSeriesData,
    TimelineEntry,
)
from villain_timeline.errors import InvalidInputError
from villain_timeline.utils.logging import get_logger, with_operation_context

logger = get_logger(__name__)

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_TRAILING_PUNCTUATION = re.compile(r"[,;:.]+$")
_WHITESPACE_RUN = re.compile(r"\s+")
_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def normalize_villain_name(name: str) -> str:
    """Collapse a raw wiki name to its identity key.

    Parenthetical aliases are removed before trailing punctuation so that
    "Vulture (Adrian Toomes)," loses both the alias and the comma.

    Example: "Green Goblin (Norman Osborn)" -> "Green Goblin"
    """
    normalized = name.strip()
    normalized = _PARENTHETICAL.sub("", normalized).strip()
    normalized = _TRAILING_PUNCTUATION.sub("", normalized).strip()
    return _WHITESPACE_RUN.sub(" ", normalized)


def slugify(name: str) -> str:
    """URL-friendly id for a normalized name. Not an identity key: distinct names may share a slug."""
    return _NON_SLUG_RUN.sub("-", name.lower()).strip("-")


def _coerce_records(records: Any) -> list[RawIssueRecord]:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        raise InvalidInputError(f"Expected a sequence of issue records, got {type(records).__name__}")

    coerced: list[RawIssueRecord] = []
    for index, record in enumerate(records):
        if isinstance(record, RawIssueRecord):
            coerced.append(record)
            continue
        if not isinstance(record, Mapping):
            raise InvalidInputError(f"Record {index} is a {type(record).__name__}, expected an issue record")
        try:
            coerced.append(RawIssueRecord.model_validate(record))
        except ValidationError as e:
            raise InvalidInputError(f"Record {index} is not a valid issue record: {e}") from e
    return coerced


def _build_timeline(records: list[RawIssueRecord], registry: dict[str, CanonicalVillain]) -> list[TimelineEntry]:
    # Issue -> villains, in registry (first-seen) order
    by_issue: dict[int, list[CanonicalVillain]] = {}
    for villain in registry.values():
        for issue_key in villain.appearances:
            by_issue.setdefault(issue_key, []).append(villain)

    timeline = []
    for record in records:
        present = by_issue.get(record.issue_key, [])
        timeline.append(
            TimelineEntry(
                issue_key=record.issue_key,
                villain_ids=[villain.id for villain in present],
                villain_names=[villain.canonical_name for villain in present],
            )
        )
    return timeline


def _summarize(registry: dict[str, CanonicalVillain]) -> CorpusSummary:
    villains = list(registry.values())
    if not villains:
        return CorpusSummary(total_villains=0, most_frequent=None, average_frequency=0.0)

    # Highest frequency wins, then earliest first appearance, then first seen
    _, most_frequent = min(
        enumerate(villains),
        key=lambda pair: (-pair[1].frequency, pair[1].first_appearance, pair[0]),
    )
    average = sum(villain.frequency for villain in villains) / len(villains)

    return CorpusSummary(total_villains=len(villains), most_frequent=most_frequent, average_frequency=average)


def aggregate(records: Sequence[RawIssueRecord | Mapping[str, Any]]) -> AggregationResult:
    """Deduplicate raw names across issues into a canonical registry.

    Args:
        records: Issue records in ascending issue order. Mappings are validated
            into RawIssueRecord (camelCase keys accepted).

    Returns:
        Registry, one timeline entry per record, and summary statistics

    Raises:
        InvalidInputError: If records is not a sequence or a record has no issue key
    """
    issues = _coerce_records(records)
    registry: dict[str, CanonicalVillain] = {}

    for record in issues:
        for raw_name in record.antagonist_names:
            if not raw_name or not raw_name.strip():
                continue

            normalized = normalize_villain_name(raw_name)
            if not normalized:
                continue

            villain = registry.get(normalized)
            if villain is None:
                registry[normalized] = CanonicalVillain(
                    id=slugify(normalized),
                    canonical_name=normalized,
                    appearances=[record.issue_key],
                )
            else:
                villain.add_appearance(record.issue_key)

    timeline = _build_timeline(issues, registry)
    summary = _summarize(registry)

    logger.debug(
        "Aggregated issue records",
        record_count=len(issues),
        villain_count=summary.total_villains,
        average_frequency=round(summary.average_frequency, 2),
    )

    return AggregationResult(registry=registry, timeline=timeline, summary=summary)


@with_operation_context("process_series")
def process_series(raw_data: RawSeriesData, processed_at: datetime | None = None) -> ProcessedData:
    """Aggregate a scrape run and stamp it with the series name and processing time.

    Args:
        raw_data: Output of a scrape run
        processed_at: Timestamp to record, defaults to now (UTC). Pass a fixed
            value for reproducible output.
    """
    if not isinstance(raw_data, RawSeriesData):
        raise InvalidInputError(f"Expected RawSeriesData, got {type(raw_data).__name__}")

    result = aggregate(raw_data.issues)

    return ProcessedData(
        series=raw_data.series,
        processed_at=processed_at or datetime.now(UTC),
        villains=result.villains,
        timeline=result.timeline,
        stats=result.summary,
    )
