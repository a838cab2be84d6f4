"""Pydantic schemas for API responses."""

from woodshop.schemas.common import ErrorResponse, HealthResponse
from woodshop.schemas.gallery import (
    FilterOption,
    FilterOptions,
    FilterSelectionOut,
    GalleryResponse,
    LookupEntryOut,
    ProductOut,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "FilterOption",
    "FilterOptions",
    "FilterSelectionOut",
    "GalleryResponse",
    "LookupEntryOut",
    "ProductOut",
]
