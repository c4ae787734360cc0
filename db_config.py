import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache

import pymysql
from pydantic_settings import BaseSettings

from errors import InvalidDsnError

logger = logging.getLogger(__name__)

MYSQL_IMAGE_8_2_0 = "docker.io/mysql:8.2.0"
MYSQL_IMAGE_8_0_35 = "docker.io/mysql:8.0.35"
MYSQL_IMAGE_5_7_44 = "docker.io/mysql:5.7.44"
MYSQL_IMAGES = (MYSQL_IMAGE_8_2_0, MYSQL_IMAGE_8_0_35, MYSQL_IMAGE_5_7_44)

# Bloat exponents: each round doubles a table that starts at one ~1KB row
SIZE_1KB = 0
SIZE_1MB = SIZE_1KB + 10
SIZE_1GB = SIZE_1MB + 10
SIZE_16GB = SIZE_1GB + 4

TEST_TABLE_NAME = "TEST_TABLE"

_DSN_RE = re.compile(
    r"^(?P<user>[^:@/]+):(?P<password>[^@]*)@tcp\((?P<host>[^():]+):(?P<port>\d+)\)/(?P<database>[^/?]+)$"
)


class Settings(BaseSettings):
    """Benchmark settings, overridable through DROPBENCH_* environment variables."""

    mysql_image: str = MYSQL_IMAGE_8_0_35
    mysql_user: str = "root"
    mysql_password: str = "password"
    mysql_database: str = "database"

    table_name: str = TEST_TABLE_NAME
    bloat_exponent: int = SIZE_1MB

    connect_timeout: int = 10
    log_level: str = "INFO"

    class Config:
        env_prefix = "DROPBENCH_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class Dsn:
    user: str
    password: str
    host: str
    port: int
    database: str

    def __str__(self) -> str:
        return format_dsn(self.user, self.password, self.host, self.port, self.database)


def format_dsn(user: str, password: str, host: str, port: int, database: str) -> str:
    return f"{user}:{password}@tcp({host}:{port})/{database}"


def parse_dsn(dsn: str) -> Dsn:
    match = _DSN_RE.match(dsn.strip())
    if not match:
        raise InvalidDsnError(dsn)
    return Dsn(
        user=match.group("user"),
        password=match.group("password"),
        host=match.group("host"),
        port=int(match.group("port")),
        database=match.group("database"),
    )


def get_db_connection(dsn, connect_timeout=None):
    """Open a pymysql connection for a DSN string or Dsn.

    Errors from the driver are raised unchanged; the caller owns the
    connection and must close it.
    """
    if isinstance(dsn, str):
        dsn = parse_dsn(dsn)
    if connect_timeout is None:
        connect_timeout = get_settings().connect_timeout

    logger.debug("Connecting to mysql at %s:%s/%s", dsn.host, dsn.port, dsn.database)
    conn = pymysql.connect(
        host=dsn.host,
        port=dsn.port,
        user=dsn.user,
        password=dsn.password,
        database=dsn.database,
        connect_timeout=connect_timeout,
        cursorclass=pymysql.cursors.DictCursor
    )
    return conn


@contextmanager
def db_connection(dsn, connect_timeout=None):
    """Yield a connection that is closed on every exit path."""
    conn = get_db_connection(dsn, connect_timeout)
    try:
        yield conn
    finally:
        conn.close()
