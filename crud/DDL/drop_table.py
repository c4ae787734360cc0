import logging

from crud.identifiers import quote_identifier

logger = logging.getLogger(__name__)


def execute_drop_table(conn, table):
    """Drop `table` if it exists. Driver errors are raised unchanged."""
    sql = f"DROP TABLE IF EXISTS {quote_identifier(table)}"
    with conn.cursor() as cursor:
        cursor.execute(sql)
    conn.commit()
    logger.debug("Dropped table %s", table)
