# ABOUTME: Data persistence layer
# ABOUTME: Pipeline Stage 4: dataset and chart config → flat JSON files

"""
Persistence Layer: Save and retrieve output files

This layer handles:
- Writing villains.json and chart-config.json
- Reading a previously written dataset back
- Mirroring outputs into the public directory served to the chart page

Data Flow: core/ and chart/ outputs → JSON files
"""

from .json_store import (
    CHART_CONFIG_FILENAME,
    VILLAINS_FILENAME,
    ensure_directories,
    mirror_to_public,
    read_json,
    write_json,
)

__all__ = [
    "CHART_CONFIG_FILENAME",
    "VILLAINS_FILENAME",
    "ensure_directories",
    "mirror_to_public",
    "read_json",
    "write_json",
]
