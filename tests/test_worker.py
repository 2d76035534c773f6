"""
Tests for the report worker: message handlers and ack/reject behaviour.
"""

import asyncio
import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

from openpyxl import load_workbook

from superfarmer.db.base import async_session_factory
from superfarmer.worker.consumer import process_message
from superfarmer.worker.excel import FIRST_DATA_ROW
from superfarmer.worker.handlers import ReportHandler
from tests.conftest import API


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _handler() -> ReportHandler:
    return ReportHandler(async_session_factory)


class TestPriceHistoryReport:
    def test_report_written_and_served(self, client, admin_headers, farmer_headers, price, commodity, city):
        client.patch(f"{API}/prices/{price['id']}", json={"price": 15000}, headers=admin_headers)
        body = json.dumps({
            "commodityId": price["commodityId"], "cityId": price["cityId"],
            "startDate": _today(), "endDate": _today(),
        }).encode()

        path = asyncio.run(_handler().handle_price_history(body))
        assert path is not None and path.exists()

        ws = load_workbook(path).active
        assert ws["A1"].value == f"Price History Report - {commodity['name']} in {city['name']}"
        # Current price first, then the archived one
        assert ws.cell(row=FIRST_DATA_ROW, column=3).value == 15000
        assert ws.cell(row=FIRST_DATA_ROW + 1, column=3).value == 12000

        response = client.get(
            f"{API}/prices/history/commodity/{price['commodityId']}/city/{price['cityId']}/download/file",
            params={"start_date": _today(), "end_date": _today()},
            headers=farmer_headers,
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )

    def test_no_current_price_skips_report(self, commodity, city):
        body = json.dumps({
            "commodityId": commodity["id"], "cityId": city["id"],
            "startDate": _today(), "endDate": _today(),
        }).encode()
        assert asyncio.run(_handler().handle_price_history(body)) is None


class TestHarvestReport:
    def test_report_written(self, client, farmer_headers, land_commodity, city, commodity):
        client.post(
            f"{API}/harvests",
            json={"landCommodityId": land_commodity["id"], "cityId": city["id"],
                  "quantity": 80, "harvestDate": "2024-06-01"},
            headers=farmer_headers,
        )
        body = json.dumps({
            "landCommodityId": land_commodity["id"], "startDate": _today(), "endDate": _today(),
        }).encode()

        path = asyncio.run(_handler().handle_harvest(body))
        assert path is not None
        assert path.name.startswith(f"harvests_{land_commodity['id']}_")

        ws = load_workbook(path).active
        assert ws["A1"].value == (
            f"Harvest Report - {commodity['name']} in {city['name']} by Budi Farmer"
        )
        assert ws.cell(row=FIRST_DATA_ROW, column=3).value == 80

        response = client.get(
            f"{API}/harvests/land_commodity/{land_commodity['id']}/download/file",
            params={"start_date": _today(), "end_date": _today()},
            headers=farmer_headers,
        )
        assert response.status_code == 200

    def test_empty_window_skips_report(self, land_commodity):
        body = json.dumps({
            "landCommodityId": land_commodity["id"],
            "startDate": "2001-01-01", "endDate": "2001-01-31",
        }).encode()
        assert asyncio.run(_handler().handle_harvest(body)) is None


class TestProcessMessage:
    def _message(self, body: bytes = b"{}"):
        message = MagicMock()
        message.body = body
        context = message.process.return_value
        context.__aexit__.return_value = False
        return message, context

    def test_success_is_acked_through_process(self):
        message, context = self._message(b'{"ok": true}')
        seen = []

        async def handler(body):
            seen.append(body)

        asyncio.run(process_message(message, handler))
        message.process.assert_called_once_with(requeue=False)
        assert seen == [b'{"ok": true}']
        assert context.__aexit__.await_args.args[0] is None

    def test_failure_is_rejected_and_logged(self, caplog):
        message, context = self._message()

        async def handler(body):
            raise ValueError("boom")

        asyncio.run(process_message(message, handler))
        assert context.__aexit__.await_args.args[0] is ValueError
        assert "failed" in caplog.text

    def test_malformed_body_is_rejected(self):
        message, context = self._message(b"not json")
        asyncio.run(process_message(message, _handler().handle_harvest))
        assert context.__aexit__.await_args.args[0] is not None
