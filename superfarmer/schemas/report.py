"""Report request messages exchanged between the API and the report worker."""

from datetime import date

from pydantic import model_validator

from superfarmer.schemas.common import CamelModel


class _DateWindow(CamelModel):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class PriceHistoryReportRequest(_DateWindow):
    commodity_id: str
    city_id: int


class HarvestReportRequest(_DateWindow):
    land_commodity_id: str
