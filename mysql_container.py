import logging
from contextlib import contextmanager

from testcontainers.community.mysql import MySqlContainer

from db_config import Dsn, get_settings

logger = logging.getLogger(__name__)

MYSQL_PORT = 3306


@contextmanager
def mysql_container(image=None, settings=None):
    """Start a disposable MySQL container and yield its Dsn.

    The container is removed when the block exits, including when startup
    itself fails part way.
    """
    settings = settings or get_settings()
    image = image or settings.mysql_image

    container = MySqlContainer(
        image,
        username=settings.mysql_user,
        password=settings.mysql_password,
        root_password=settings.mysql_password,
        dbname=settings.mysql_database,
        port=MYSQL_PORT,
    )
    logger.info("Starting container %s", image)
    try:
        container.start()
        dsn = Dsn(
            user=settings.mysql_user,
            password=settings.mysql_password,
            host=container.get_container_host_ip(),
            port=int(container.get_exposed_port(MYSQL_PORT)),
            database=settings.mysql_database,
        )
        logger.info("Container %s ready at %s:%d", image, dsn.host, dsn.port)
        yield dsn
    finally:
        logger.info("Stopping container %s", image)
        container.stop()
