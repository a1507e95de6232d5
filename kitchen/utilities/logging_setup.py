import logging

from kitchen.utilities.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once for the process (uvicorn keeps its own handlers)."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # SQLAlchemy is chatty at INFO; keep it quiet unless explicitly echoing
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
