"""ItemType model - product kind (small goods, tables, cabinets)."""

from woodshop.models.base import Base
from woodshop.models.lookup_type import LookupTypeMixin


class ItemType(Base, LookupTypeMixin):
    """Item type classification.

    Maps to the `item_types` table. Names hold the filter identifiers
    (`small_goods`, `tables`, `cabinets`).
    """

    __tablename__ = "item_types"

    def __repr__(self) -> str:
        return f"<ItemType(id={self.id}, name='{self.name}')>"
