"""Naming and lookup of generated Excel reports on disk.

The worker writes `{prefix}_{YYYYmmdd_HHMMSS}.xlsx` into the reports
directory; the API serves the newest file matching a prefix.
"""

from __future__ import annotations

import glob
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from superfarmer.core.config import settings

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def price_history_prefix(commodity_id: str, city_id: int, start: date, end: date) -> str:
    return f"price_history_{commodity_id}_{city_id}_{start.isoformat()}_{end.isoformat()}"


def harvest_prefix(land_commodity_id: str, start: date, end: date) -> str:
    return f"harvests_{land_commodity_id}_{start.isoformat()}_{end.isoformat()}"


def reports_dir() -> Path:
    return Path(settings.reports_dir)


def new_report_path(prefix: str, now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S")
    return reports_dir() / f"{prefix}_{stamp}.xlsx"


def latest_report(prefix: str) -> Optional[Path]:
    """Newest report for `prefix`, or None when the worker has not written one yet."""
    matches = sorted(reports_dir().glob(f"{glob.escape(prefix)}_*.xlsx"))
    return matches[-1] if matches else None
