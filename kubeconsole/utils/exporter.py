"""Export of list views to CSV or JSON files."""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from kubeconsole.constants.enums import ExportFormat, ViewType

logger = logging.getLogger(__name__)


def export_filename(view: ViewType, fmt: ExportFormat, now: datetime) -> str:
    return f"{view.value}_{now.strftime('%Y%m%d_%H%M%S')}.{fmt.value}"


def export_rows(
    view: ViewType,
    rows: Sequence[dict[str, Any]],
    directory: str | Path,
    fmt: ExportFormat = ExportFormat.CSV,
    now: Callable[[], datetime] = datetime.now,
) -> Path:
    """Write ``rows`` to a timestamped file in ``directory`` and return its path.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    target_dir = Path(directory).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(view, fmt, now())

    if fmt is ExportFormat.JSON:
        path.write_text(json.dumps(list(rows), indent=2, default=str), encoding="utf-8")
    else:
        fieldnames = list(rows[0].keys()) if rows else []
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            if fieldnames:
                writer.writeheader()
            writer.writerows(rows)

    logger.info("Exported %d %s rows to %s", len(rows), view.value, path)
    return path
