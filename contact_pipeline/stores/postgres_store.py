"""
PostgreSQL-backed tables.

Every column is stored as TEXT. Tables created by the store carry a
serial row_id so reads come back in insertion order.
"""

from datetime import date, datetime
from typing import Any, Sequence

from psycopg import Error as PsycopgError
from psycopg import sql

from contact_pipeline.observability.logger import get_logger

from .base import StoreError, TabularStore
from .connection import DatabaseConnectionPool

logger = get_logger(__name__)

ROW_ID_COLUMN = "row_id"


def _cell(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class PostgresTableStore(TabularStore):
    """
    A table stored in PostgreSQL.

    The header row returned by read_rows() is the table's column list in
    ordinal order, without the row_id column.
    """

    def __init__(
        self,
        pool: DatabaseConnectionPool,
        name: str,
        columns: Sequence[str] | None = None,
        schema: str = "public",
    ):
        super().__init__(name, columns)
        self.pool = pool
        self.schema = schema
        self._table = sql.Identifier(schema, name)

    def _table_columns(self) -> list[str]:
        rows = self.pool.execute_query(
            """
            SELECT column_name
            FROM information_schema.columns
            WHERE table_schema = %s AND table_name = %s
            ORDER BY ordinal_position
            """,
            (self.schema, self.name),
        )
        return [row["column_name"] for row in rows]

    def ensure_table(self) -> None:
        """Create the table from the configured columns if it does not exist."""
        if not self.columns:
            raise StoreError(f"Cannot create table {self.name!r} without columns")

        column_defs = [sql.SQL("{} BIGSERIAL PRIMARY KEY").format(sql.Identifier(ROW_ID_COLUMN))]
        column_defs += [sql.SQL("{} TEXT").format(sql.Identifier(column)) for column in self.columns]
        command = sql.SQL("CREATE TABLE IF NOT EXISTS {} ({})").format(
            self._table, sql.SQL(", ").join(column_defs)
        )
        try:
            self.pool.execute_command(command)
        except PsycopgError as e:
            raise StoreError(f"Failed to create table {self.name!r}: {e}") from e

    def read_rows(self) -> list[list[Any]]:
        try:
            columns = self._table_columns()
            if not columns:
                raise StoreError(f"Table not found: {self.schema}.{self.name}")

            data_columns = [column for column in columns if column != ROW_ID_COLUMN]
            query = sql.SQL("SELECT {} FROM {}").format(
                sql.SQL(", ").join(sql.Identifier(column) for column in data_columns),
                self._table,
            )
            if ROW_ID_COLUMN in columns:
                query += sql.SQL(" ORDER BY {}").format(sql.Identifier(ROW_ID_COLUMN))

            rows = self.pool.execute_query(query)
        except PsycopgError as e:
            raise StoreError(f"Failed to read table {self.name!r}: {e}") from e

        return [data_columns] + [[row[column] for column in data_columns] for row in rows]

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> int:
        if not rows:
            return 0

        self.ensure_table()
        command = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            self._table,
            sql.SQL(", ").join(sql.Identifier(column) for column in self.columns),
            sql.SQL(", ").join(sql.Placeholder() for _ in self.columns),
        )
        params = [tuple(_cell(value) for value in row) for row in rows]

        try:
            self.pool.execute_batch(command, params)
        except PsycopgError as e:
            raise StoreError(f"Failed to append to table {self.name!r}: {e}") from e

        logger.debug(f"Appended {len(rows)} rows to {self.schema}.{self.name}")
        return len(rows)
