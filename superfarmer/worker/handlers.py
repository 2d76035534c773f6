"""Turn report-request messages into Excel files on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from superfarmer.core.reports import harvest_prefix, new_report_path, price_history_prefix
from superfarmer.repositories.report import ReportRepository
from superfarmer.schemas.report import HarvestReportRequest, PriceHistoryReportRequest
from superfarmer.worker.excel import write_harvest_report, write_price_history_report

logger = logging.getLogger(__name__)


class ReportHandler:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def handle_price_history(self, body: bytes) -> Optional[Path]:
        request = PriceHistoryReportRequest.model_validate_json(body)
        async with self._session_factory() as session:
            rows = await ReportRepository(session).price_history_rows(
                request.commodity_id, request.city_id, request.start_date, request.end_date
            )
        if not rows:
            logger.error(
                "No current price for commodity %s in city %s; report skipped",
                request.commodity_id, request.city_id,
            )
            return None

        path = new_report_path(
            price_history_prefix(
                request.commodity_id, request.city_id, request.start_date, request.end_date
            )
        )
        write_price_history_report(path, rows)
        logger.info("Wrote price history report %s (%d rows)", path, len(rows))
        return path

    async def handle_harvest(self, body: bytes) -> Optional[Path]:
        request = HarvestReportRequest.model_validate_json(body)
        async with self._session_factory() as session:
            rows = await ReportRepository(session).harvest_rows(
                request.land_commodity_id, request.start_date, request.end_date
            )
        if not rows:
            logger.warning(
                "No harvests for land commodity %s between %s and %s; report skipped",
                request.land_commodity_id, request.start_date, request.end_date,
            )
            return None

        path = new_report_path(
            harvest_prefix(request.land_commodity_id, request.start_date, request.end_date)
        )
        write_harvest_report(path, rows)
        logger.info("Wrote harvest report %s (%d rows)", path, len(rows))
        return path
