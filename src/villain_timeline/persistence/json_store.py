# ABOUTME: Flat JSON file persistence for the dataset and chart configuration
# ABOUTME: Writes pretty-printed UTF-8 JSON and mirrors outputs into the public data directory

import json
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from villain_timeline.utils.logging import get_logger

logger = get_logger(__name__)

VILLAINS_FILENAME = "villains.json"
CHART_CONFIG_FILENAME = "chart-config.json"


def ensure_directories(*directories: Path) -> None:
    """Create any missing output directories."""
    for directory in directories:
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info("Created data directory", path=str(directory))


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as indented JSON, creating the parent directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("Saved JSON file", path=str(path), size_bytes=path.stat().st_size)
    return path


def read_json(path: Path) -> Any:
    """Load a JSON document written by write_json."""
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def mirror_to_public(files: Iterable[Path], public_dir: Path) -> list[Path]:
    """Copy output files into the directory served to the chart page.

    Copy failures are logged and skipped; the primary outputs are already written.
    """
    copied: list[Path] = []
    try:
        ensure_directories(public_dir)
    except OSError as e:
        logger.warning("Failed to create public data directory", path=str(public_dir), error=str(e))
        return copied

    for source in files:
        target = public_dir / source.name
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            logger.warning("Failed to copy data to public directory", source=str(source), error=str(e))
            continue
        copied.append(target)

    logger.info("Mirrored data files to public directory", public_dir=str(public_dir), files=len(copied))
    return copied
