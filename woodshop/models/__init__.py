"""SQLAlchemy models for the woodshop catalog.

This service only reads these tables; the admin panel writes them through
the hosted backend.
"""

from woodshop.models.base import Base, TimestampMixin
from woodshop.models.item_type import ItemType
from woodshop.models.lookup_type import LookupTypeMixin
from woodshop.models.product import Product
from woodshop.models.wood_type import WoodType

__all__ = [
    "Base",
    "TimestampMixin",
    "LookupTypeMixin",
    "ItemType",
    "Product",
    "WoodType",
]
