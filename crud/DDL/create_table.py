import logging

from crud.DDL.drop_table import execute_drop_table
from crud.identifiers import quote_identifier

logger = logging.getLogger(__name__)

# Four latin1 CHAR(255) columns plus an INT: about 1KB per row
WIDE_ROW_COLUMNS = "a INT,b CHAR(255),c CHAR(255),d CHAR(255),e CHAR(255)"


def execute_create_table(conn, table):
    """Replace `table` with an empty wide-row table."""
    execute_drop_table(conn, table)

    sql = f"CREATE TABLE IF NOT EXISTS {quote_identifier(table)} ({WIDE_ROW_COLUMNS}) charset=latin1"
    with conn.cursor() as cursor:
        cursor.execute(sql)
    conn.commit()
    logger.debug("Created table %s", table)
