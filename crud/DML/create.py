import logging

from crud.DDL.create_table import execute_create_table
from crud.identifiers import quote_identifier

logger = logging.getLogger(__name__)


def execute_insert_seed_row(conn, table):
    sql = (
        f"INSERT INTO {quote_identifier(table)} "
        "VALUES(1,repeat('x', 255),repeat('x', 255),repeat('x', 255),repeat('x', 255))"
    )
    with conn.cursor() as cursor:
        cursor.execute(sql)
    conn.commit()


def execute_double_rows(conn, table):
    """Insert a copy of every row of `table` into itself."""
    quoted = quote_identifier(table)
    with conn.cursor() as cursor:
        cursor.execute(f"INSERT INTO {quoted} SELECT * FROM {quoted}")
    conn.commit()


def execute_bloat_table(conn, table, exponential_size):
    """Create `table` holding 2 ** exponential_size rows of about 1KB each.

    The table on disk ends up bigger than 1 << exponential_size KB. As a rule
    of thumb there is about 30% overhead on top of the data once it passes 1GB.

    A failing statement leaves the table partially bloated.
    """
    if exponential_size < 0:
        raise ValueError(f"exponential_size must be >= 0, got {exponential_size}")

    execute_create_table(conn, table)
    execute_insert_seed_row(conn, table)

    for i in range(exponential_size):
        execute_double_rows(conn, table)
        logger.debug("Bloat round %d/%d on %s: %d rows", i + 1, exponential_size, table, 2 ** (i + 1))

    logger.info("Bloated %s to %d rows", table, 2 ** exponential_size)
