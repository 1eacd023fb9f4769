"""Create the Tarbiya schema. ``--reset`` drops every table first."""
import logging
import sys

from tarbiya.core.config import settings
from tarbiya.db.base import Base
from tarbiya.db.session import engine

logger = logging.getLogger("tarbiya.init_db")

def init(reset: bool = False):
    if reset:
        logger.warning(f"Dropping all tables on {engine.url.render_as_string(hide_password=True)}")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init(reset="--reset" in sys.argv[1:])
