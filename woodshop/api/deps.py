"""FastAPI dependencies for dependency injection.

Provides:
- Gallery service wired to the database and image resolver
- Filter selection decoded from the request query string
"""

from typing import Annotated

from fastapi import Depends, Request

from woodshop.core.filters import FilterSelection, decode
from woodshop.infra.database import get_db_session
from woodshop.infra.logging import get_logger
from woodshop.infra.storage import ImageResolver, get_image_resolver
from woodshop.services.gallery_service import GalleryService

logger = get_logger(__name__)


async def get_resolver() -> ImageResolver:
    """Get image resolver dependency."""
    return get_image_resolver()


async def get_gallery_service(
    resolver: Annotated[ImageResolver, Depends(get_resolver)],
) -> GalleryService:
    """Get a gallery service reading through the shared engine."""
    return GalleryService(session_factory=get_db_session, resolver=resolver)


async def get_filter_selection(request: Request) -> FilterSelection:
    """Decode the gallery filters from the query string.

    Malformed parameters fall back to defaults rather than failing validation.
    """
    selection = decode(request.query_params)
    logger.debug("Decoded filter selection", query=str(request.query_params), selection=selection)
    return selection


# Type aliases for cleaner annotations
Gallery = Annotated[GalleryService, Depends(get_gallery_service)]
Filters = Annotated[FilterSelection, Depends(get_filter_selection)]
