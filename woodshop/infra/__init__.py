"""Infrastructure - Database, image storage URLs, logging."""

from woodshop.infra.database import get_db_session, close_db_engine
from woodshop.infra.storage import ImageResolver, get_image_resolver
from woodshop.infra.logging import setup_logging, get_logger

__all__ = [
    "get_db_session",
    "close_db_engine",
    "ImageResolver",
    "get_image_resolver",
    "setup_logging",
    "get_logger",
]
