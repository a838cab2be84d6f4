"""WoodType model - open, admin-extensible wood species list."""

from woodshop.models.base import Base
from woodshop.models.lookup_type import LookupTypeMixin


class WoodType(Base, LookupTypeMixin):
    """Wood species (Walnut, Maple, Oak, ...).

    Maps to the `wood_types` table.
    """

    __tablename__ = "wood_types"

    def __repr__(self) -> str:
        return f"<WoodType(id={self.id}, name='{self.name}')>"
