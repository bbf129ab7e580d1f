# ABOUTME: Chart-ready output for the villains-per-issue line chart
# ABOUTME: Pipeline Stage 3: processed timeline → scales, colours and path data

from .config import (
    ChartConfig,
    ChartPoint,
    LinearScale,
    export_chart_config_json,
    format_chart_points,
    generate_chart_config,
    generate_line_path,
    villain_color,
)

__all__ = [
    "ChartConfig",
    "ChartPoint",
    "LinearScale",
    "export_chart_config_json",
    "format_chart_points",
    "generate_chart_config",
    "generate_line_path",
    "villain_color",
]
