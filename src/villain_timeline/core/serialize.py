# ABOUTME: JSON dataset contract consumed by the chart page (villains.json)
# ABOUTME: Converts processed data to the camelCase payload and back, field names must stay stable

import math
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from villain_timeline.core.aggregator import slugify
from villain_timeline.core.models import CanonicalVillain, CorpusSummary, ProcessedData, TimelineEntry
from villain_timeline.errors import InvalidInputError


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatsPayload(_CamelModel):
    total_villains: int
    most_frequent: str | None
    most_frequent_count: int
    average_frequency: float


class VillainPayload(_CamelModel):
    id: str
    name: str
    aliases: list[str]
    first_appearance: int
    appearances: list[int]
    frequency: int


class TimelinePayload(_CamelModel):
    issue: int
    villain_count: int
    villains: list[str]


class DatasetPayload(_CamelModel):
    """Top-level villains.json document. No schema version: any change here breaks the chart page."""

    series: str
    processed_at: str
    stats: StatsPayload
    villains: list[VillainPayload]
    timeline: list[TimelinePayload]


def round_half_up(value: float, places: int = 2) -> float:
    """Round to places decimals with halves going up, so 1.125 becomes 1.13 rather than 1.12."""
    scale = 10**places
    return math.floor(value * scale + 0.5) / scale


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    moment = moment.astimezone(UTC) if moment.tzinfo else moment.replace(tzinfo=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_dataset_payload(data: ProcessedData) -> DatasetPayload:
    most_frequent = data.stats.most_frequent

    return DatasetPayload(
        series=data.series,
        processed_at=format_timestamp(data.processed_at),
        stats=StatsPayload(
            total_villains=data.stats.total_villains,
            most_frequent=most_frequent.canonical_name if most_frequent else None,
            most_frequent_count=most_frequent.frequency if most_frequent else 0,
            average_frequency=round_half_up(data.stats.average_frequency),
        ),
        villains=[
            VillainPayload(
                id=villain.id,
                name=villain.canonical_name,
                aliases=list(villain.aliases),
                first_appearance=villain.first_appearance,
                appearances=list(villain.appearances),
                frequency=villain.frequency,
            )
            for villain in data.villains
        ],
        timeline=[
            TimelinePayload(issue=entry.issue_key, villain_count=entry.count, villains=list(entry.villain_names))
            for entry in data.timeline
        ],
    )


def serialize_processed_data(data: ProcessedData) -> dict[str, Any]:
    """Export processed data as the JSON-compatible villains.json object."""
    return build_dataset_payload(data).model_dump(by_alias=True)


def deserialize_dataset(payload: dict[str, Any]) -> ProcessedData:
    """Rebuild processed data from a previously written villains.json object.

    Raises:
        InvalidInputError: If the payload does not match the dataset contract
    """
    try:
        dataset = DatasetPayload.model_validate(payload)
    except ValidationError as e:
        raise InvalidInputError(f"Not a villain dataset: {e}") from e

    villains = [
        CanonicalVillain(
            id=villain.id,
            canonical_name=villain.name,
            aliases=villain.aliases,
            appearances=villain.appearances,
        )
        for villain in dataset.villains
    ]
    by_name = {villain.canonical_name: villain for villain in villains}

    most_frequent = by_name.get(dataset.stats.most_frequent) if dataset.stats.most_frequent else None
    average = sum(v.frequency for v in villains) / len(villains) if villains else 0.0

    return ProcessedData(
        series=dataset.series,
        processed_at=datetime.fromisoformat(dataset.processed_at.replace("Z", "+00:00")),
        villains=villains,
        timeline=[
            TimelineEntry(
                issue_key=entry.issue,
                villain_ids=[by_name[name].id if name in by_name else slugify(name) for name in entry.villains],
                villain_names=entry.villains,
            )
            for entry in dataset.timeline
        ],
        stats=CorpusSummary(
            total_villains=dataset.stats.total_villains,
            most_frequent=most_frequent,
            average_frequency=average,
        ),
    )
