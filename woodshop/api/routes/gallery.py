"""Gallery, product detail and lookup endpoints."""

from fastapi import APIRouter, HTTPException, status

from woodshop.api.deps import Filters, Gallery
from woodshop.infra.logging import get_logger
from woodshop.schemas.gallery import GalleryResponse, LookupEntryOut, ProductOut
from woodshop.services.catalog_repository import LOOKUP_MODELS

router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "/gallery",
    response_model=GalleryResponse,
    summary="Filtered product gallery",
)
async def gallery(service: Gallery, selection: Filters) -> GalleryResponse:
    """Products matching the `inStock`, `type`, `size` and `wood` query filters.

    Read failures degrade to an empty or unclassified gallery and set
    `load_failed`; they never produce an error response.
    """
    view = await service.gallery(selection)
    return GalleryResponse.from_view(view)


@router.get(
    "/products/{product_id}",
    response_model=ProductOut,
    summary="Product detail",
)
async def product_detail(product_id: str, service: Gallery) -> ProductOut:
    product = await service.product(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product not found: {product_id}",
        )
    return ProductOut.from_display(product)


@router.get(
    "/lookups/{kind}",
    response_model=list[LookupEntryOut],
    summary="Active wood or item types",
)
async def lookups(kind: str, service: Gallery) -> list[LookupEntryOut]:
    """Active entries ordered by sort order, then name. `kind` is `wood` or `item`."""
    if kind not in LOOKUP_MODELS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown lookup kind: {kind}",
        )
    entries = await service.lookups(kind)
    return [LookupEntryOut.from_entry(e) for e in entries]
