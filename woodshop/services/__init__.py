"""Services - catalog reads and gallery assembly."""

from woodshop.services.catalog_repository import CatalogRepository, LookupEntry
from woodshop.services.gallery_service import GalleryService, GalleryView

__all__ = [
    "CatalogRepository",
    "LookupEntry",
    "GalleryService",
    "GalleryView",
]
