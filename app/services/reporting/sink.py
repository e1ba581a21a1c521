"""Record sink: durable destination for report rows."""

from abc import ABC, abstractmethod
from typing import Optional

from app.config import config
from app.lib.logger import configure_logger
from app.services.integrations.sheets import GoogleSheetsApi, SheetsApiError
from app.services.reporting.exceptions import SinkWriteError
from app.services.reporting.models import ReportRow


class RecordSink(ABC):
    """Appends report rows to an external tabular store."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def append(self, row: ReportRow) -> None:
        """Append one row.

        Raises:
            SinkWriteError: If the row was not written
        """
        pass


class GoogleSheetsRecordSink(RecordSink):
    """Appends rows to the reports range of the voting spreadsheet."""

    def __init__(
        self,
        api: Optional[GoogleSheetsApi] = None,
        range_name: Optional[str] = None,
    ):
        super().__init__()
        self.api = api or GoogleSheetsApi(
            timeout_seconds=config.reporting.sink_timeout_seconds
        )
        self.range_name = range_name or config.sheets.reports_range

    async def append(self, row: ReportRow) -> None:
        try:
            await self.api.append_values(self.range_name, [row.to_values()])
        except SheetsApiError as e:
            raise SinkWriteError(
                row.proposal_id,
                f"Sheet append failed: {e}",
                status_code=e.status_code,
            ) from e
        self.logger.info(
            "Report data logged to Google Sheet",
            extra={"proposal_id": row.proposal_id, "range": self.range_name},
        )
