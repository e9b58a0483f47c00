"""
Reads raw contact records from a tabular source.
"""

from contact_pipeline.core.models import RawRecord, build_raw_record, is_empty_row, normalize_header
from contact_pipeline.observability.logger import get_logger
from contact_pipeline.stores import TabularStore

logger = get_logger(__name__)

REQUIRED_COLUMNS = (
    "name",
    "email",
    "phone",
    "street_address",
    "city",
    "state",
    "zip_code",
    "category",
)


class TableReader:
    """
    Turns a table (header row + data rows) into RawRecords.

    Rows whose cells are all empty are skipped before normalization.
    """

    def __init__(self, store: TabularStore):
        """
        Initialize table reader.

        Args:
            store: Source table
        """
        self.store = store

    def read(self) -> list[RawRecord]:
        """
        Read every non-empty data row of the source table.

        Returns:
            RawRecords in table order; [] when the table has no data rows
        """
        rows = self.store.read_rows()
        if not rows:
            return []

        headers = [normalize_header(cell) for cell in rows[0]]
        missing = [column for column in REQUIRED_COLUMNS if column not in headers]
        if missing:
            # Records still flow; absent fields read as empty
            logger.warning(
                f"Source table {self.store.name!r} is missing columns: {', '.join(missing)}",
                extra={"missing_columns": missing},
            )

        data_rows = rows[1:]
        records = [build_raw_record(headers, row) for row in data_rows if not is_empty_row(row)]

        skipped = len(data_rows) - len(records)
        if skipped:
            logger.info(f"Skipped {skipped} empty rows")

        return records
