"""Catalog reads against the hosted Postgres tables.

Returns plain rows: lookup entries for the wood/item type tables and raw
product mappings for projection. All reads are ordered so callers get a
stable display order.
"""

import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from woodshop.infra.logging import get_logger
from woodshop.models.item_type import ItemType
from woodshop.models.product import Product
from woodshop.models.wood_type import WoodType

logger = get_logger(__name__)

LOOKUP_MODELS: dict[str, type[WoodType] | type[ItemType]] = {
    "wood": WoodType,
    "item": ItemType,
}


@dataclass(frozen=True)
class LookupEntry:
    """Wood or item type entry."""

    id: str
    name: str
    sort_order: int
    is_active: bool = True


def lookup_model(kind: str) -> type[WoodType] | type[ItemType]:
    """Model backing a lookup kind.

    Raises:
        ValueError: If kind is not "wood" or "item"
    """
    try:
        return LOOKUP_MODELS[kind]
    except KeyError:
        raise ValueError(f"Unknown lookup kind: {kind!r}") from None


class CatalogRepository:
    """Read access to products and their lookup tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_types(self, kind: str, active_only: bool = True) -> list[LookupEntry]:
        """List lookup entries ordered by sort_order, then name.

        Args:
            kind: "wood" or "item"
            active_only: Skip entries hidden from the filter options

        Returns:
            Ordered lookup entries
        """
        model = lookup_model(kind)

        stmt = select(model.id, model.name, model.sort_order, model.is_active)
        if active_only:
            stmt = stmt.where(model.is_active.is_(True))
        stmt = stmt.order_by(model.sort_order.asc(), model.name.asc())

        result = await self._session.execute(stmt)
        entries = [
            LookupEntry(
                id=str(row.id),
                name=row.name or "",
                sort_order=row.sort_order or 0,
                is_active=bool(row.is_active),
            )
            for row in result.all()
        ]

        logger.debug("Loaded lookup entries", kind=kind, count=len(entries), active_only=active_only)
        return entries

    async def list_products(self) -> list[dict[str, Any]]:
        """All product rows with their stored fields, newest first."""
        stmt = select(Product.__table__).order_by(Product.created_at.desc())
        result = await self._session.execute(stmt)
        rows = [dict(row) for row in result.mappings().all()]

        logger.debug("Loaded products", count=len(rows))
        return rows

    async def get_product(self, product_id: str) -> dict[str, Any] | None:
        """A single product row by id, or None if missing.

        Ids that are not UUIDs cannot exist and short-circuit to None.
        """
        try:
            uuid.UUID(str(product_id))
        except ValueError:
            logger.debug("Rejected malformed product id", product_id=product_id)
            return None

        stmt = select(Product.__table__).where(Product.id == str(product_id))
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row is not None else None
