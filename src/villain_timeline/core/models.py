# ABOUTME: Domain models for scraped issues, canonical villains, timeline entries and corpus statistics
# ABOUTME: Derived values (frequency, first appearance, counts) are computed from the data they describe

from bisect import insort
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator


class RawIssueRecord(BaseModel):
    """Antagonist names extracted from one issue page.

    A failed fetch still yields a record: empty name list and a sentinel title.
    """

    model_config = ConfigDict(frozen=True)

    issue_key: int = Field(ge=1, validation_alias=AliasChoices("issue_key", "issueKey", "issueNumber"))
    title: str = Field(default="", description="Human readable issue title")
    antagonist_names: tuple[str | None, ...] = Field(
        default=(),
        validation_alias=AliasChoices("antagonist_names", "antagonistNames", "antagonists"),
        description="Raw names in page order, before normalization. Missing or blank entries are skipped on aggregation",
    )

    @property
    def has_antagonists(self) -> bool:
        return bool(self.antagonist_names)


class RawSeriesData(BaseModel):
    """Everything one scrape run collected, in ascending issue order."""

    series: str
    base_url: str
    issues: list[RawIssueRecord] = Field(default_factory=list)

    @property
    def issues_with_antagonists(self) -> int:
        return sum(1 for issue in self.issues if issue.has_antagonists)


class CanonicalVillain(BaseModel):
    """One deduplicated character, keyed by its normalized name."""

    id: str = Field(description="Slug of the canonical name, a display/lookup id only")
    canonical_name: str
    aliases: list[str] = Field(default_factory=list)
    appearances: list[int] = Field(min_length=1, description="Issue numbers, ascending and unique")

    @field_validator("appearances")
    @classmethod
    def _sorted_unique(cls, value: list[int]) -> list[int]:
        return sorted(set(value))

    @computed_field
    @property
    def frequency(self) -> int:
        return len(self.appearances)

    @computed_field
    @property
    def first_appearance(self) -> int:
        return self.appearances[0]

    def add_appearance(self, issue_key: int) -> bool:
        """Record an appearance, keeping the list sorted. Returns False if already recorded."""
        if issue_key in self.appearances:
            return False
        insort(self.appearances, issue_key)
        return True


class TimelineEntry(BaseModel):
    """Villains present in one issue."""

    issue_key: int
    villain_ids: list[str] = Field(default_factory=list)
    villain_names: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def count(self) -> int:
        return len(self.villain_ids)


class CorpusSummary(BaseModel):
    """Summary statistics over the whole registry."""

    total_villains: int = 0
    most_frequent: CanonicalVillain | None = None
    average_frequency: float = 0.0


class AggregationResult(BaseModel):
    """Output of a single aggregation pass."""

    registry: dict[str, CanonicalVillain] = Field(
        default_factory=dict, description="Normalized name -> villain, in first-seen order"
    )
    timeline: list[TimelineEntry] = Field(default_factory=list)
    summary: CorpusSummary = Field(default_factory=CorpusSummary)

    @property
    def villains(self) -> list[CanonicalVillain]:
        return list(self.registry.values())


class ProcessedData(BaseModel):
    """Aggregated series data ready for serialization and charting."""

    series: str
    processed_at: datetime
    villains: list[CanonicalVillain] = Field(default_factory=list)
    timeline: list[TimelineEntry] = Field(default_factory=list)
    stats: CorpusSummary = Field(default_factory=CorpusSummary)
