# ABOUTME: Line chart configuration built from the villain timeline (chart-config.json)
# ABOUTME: Computes points, linear scale domains/ranges, stable per-villain colours and an SVG path

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from villain_timeline.core.models import ProcessedData

COLOR_PALETTE = [
    "#e74c3c",  # Red
    "#3498db",  # Blue
    "#2ecc71",  # Green
    "#f39c12",  # Orange
    "#9b59b6",  # Purple
    "#1abc9c",  # Turquoise
    "#e67e22",  # Dark Orange
    "#34495e",  # Dark Gray
    "#16a085",  # Dark Turquoise
    "#d35400",  # Pumpkin
    "#c0392b",  # Dark Red
    "#8e44ad",  # Dark Purple
    "#27ae60",  # Dark Green
    "#2980b9",  # Dark Blue
    "#f1c40f",  # Yellow
]

DEFAULT_MARGIN = {"top": 20, "right": 20, "bottom": 30, "left": 60}

Number = int | float


class ChartPoint(BaseModel):
    """One x/y point of the villains-per-issue line."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    issue_number: int
    villains_in_issue: list[str] = Field(default_factory=list)
    villain_count: int


class LinearScale(BaseModel):
    domain: tuple[Number, Number]
    range: tuple[Number, Number]

    def __call__(self, value: float) -> float:
        """Map a domain value onto the range. A zero-width domain maps to the range start."""
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


class ChartConfig(BaseModel):
    data: list[ChartPoint]
    x: LinearScale
    y: LinearScale
    colors: dict[str, str] = Field(default_factory=dict)


def villain_color(name: str) -> str:
    """Pick a palette colour from a 32-bit string hash so a villain keeps its colour across runs."""
    h = 0
    for char in name:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return COLOR_PALETTE[abs(h) % len(COLOR_PALETTE)]


def format_chart_points(data: ProcessedData) -> list[ChartPoint]:
    return [
        ChartPoint(
            issue_number=entry.issue_key,
            villains_in_issue=list(entry.villain_names),
            villain_count=entry.count,
        )
        for entry in data.timeline
    ]


def generate_chart_config(data: ProcessedData, width: int = 1200, height: int = 600) -> ChartConfig:
    """Build the chart configuration for the villains-per-issue line.

    Args:
        data: Processed villain data
        width: SVG width in pixels
        height: SVG height in pixels
    """
    points = format_chart_points(data)
    margin = DEFAULT_MARGIN

    max_issue = max((p.issue_number for p in points), default=1)
    max_villains = max((p.villain_count for p in points), default=0)

    return ChartConfig(
        data=points,
        x=LinearScale(domain=(1, max_issue), range=(margin["left"], width - margin["right"])),
        y=LinearScale(domain=(0, max_villains), range=(height - margin["bottom"], margin["top"])),
        colors={villain.canonical_name: villain_color(villain.canonical_name) for villain in data.villains},
    )


def export_chart_config_json(config: ChartConfig) -> dict[str, Any]:
    """Plain JSON object for chart-config.json."""
    return {
        "data": [point.model_dump(by_alias=True) for point in config.data],
        "scales": {
            "x": {"domain": list(config.x.domain), "range": list(config.x.range)},
            "y": {"domain": list(config.y.domain), "range": list(config.y.range)},
        },
        "colors": dict(config.colors),
        "path": generate_line_path(config.data, config.x, config.y),
    }


def _format_coordinate(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}".rstrip("0").rstrip(".")


def generate_line_path(points: Sequence[ChartPoint], x_scale: LinearScale, y_scale: LinearScale) -> str:
    """SVG path command ("M x,y L x,y ...") through every point."""
    segments = [
        f"{_format_coordinate(x_scale(p.issue_number))},{_format_coordinate(y_scale(p.villain_count))}" for p in points
    ]
    if not segments:
        return ""
    return "M " + " L ".join(segments)
