"""Gallery service - fetch, project and filter the catalog.

The lookup tables and the product rows are read concurrently, each in its
own session, and projection waits for all of them. A failed read is logged
and treated as an empty result so the page degrades to an unclassified or
empty gallery instead of an error.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from woodshop.core.filters import ITEM_TYPES, FilterSelection
from woodshop.core.projection import (
    DisplayProduct,
    apply_filters,
    build_lookup,
    project,
    sort_products,
)
from woodshop.infra.database import get_db_session
from woodshop.infra.logging import get_logger
from woodshop.infra.storage import ImageResolver, get_image_resolver
from woodshop.services.catalog_repository import (
    CatalogRepository,
    LookupEntry,
    lookup_model,
)

logger = get_logger(__name__)

T = TypeVar("T")

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


@dataclass(frozen=True)
class CatalogSnapshot:
    """Everything read for one gallery view.

    Attributes:
        wood_types: All wood types, active or not, in display order
        item_types: All item types, active or not, in display order
        products: Raw product rows
        failed: Names of the reads that failed and were emptied
    """

    wood_types: list[LookupEntry] = field(default_factory=list)
    item_types: list[LookupEntry] = field(default_factory=list)
    products: list[dict[str, Any]] = field(default_factory=list)
    failed: tuple[str, ...] = ()

    @property
    def load_failed(self) -> bool:
        return bool(self.failed)


@dataclass(frozen=True)
class GalleryView:
    """Filtered gallery ready for rendering."""

    selection: FilterSelection
    products: list[DisplayProduct]
    total: int
    wood_options: list[LookupEntry]
    item_options: list[LookupEntry]
    load_failed: bool = False

    @property
    def count(self) -> int:
        return len(self.products)


class GalleryService:
    """Builds gallery views from the catalog tables."""

    def __init__(
        self,
        session_factory: SessionFactory = get_db_session,
        resolver: ImageResolver | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session_factory: Returns an async context manager yielding a session
            resolver: Image URL resolver (defaults to the shared resolver)
        """
        self._session_factory = session_factory
        self._resolver = resolver or get_image_resolver()

    async def _read(
        self,
        name: str,
        reader: Callable[[CatalogRepository], Awaitable[T]],
        default: T,
    ) -> tuple[T, bool]:
        """Run one read in its own session, degrading to `default` on failure."""
        try:
            async with self._session_factory() as session:
                return await reader(CatalogRepository(session)), True
        except Exception as e:
            logger.warning(
                "Catalog read failed, continuing with empty result",
                resource=name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return default, False

    async def load_catalog(self) -> CatalogSnapshot:
        """Read both lookup tables and all products concurrently."""
        (woods, woods_ok), (items, items_ok), (products, products_ok) = await asyncio.gather(
            self._read("wood_types", lambda repo: repo.list_types("wood", active_only=False), []),
            self._read("item_types", lambda repo: repo.list_types("item", active_only=False), []),
            self._read("products", lambda repo: repo.list_products(), []),
        )

        failed = tuple(
            name
            for name, ok in (
                ("wood_types", woods_ok),
                ("item_types", items_ok),
                ("products", products_ok),
            )
            if not ok
        )

        return CatalogSnapshot(
            wood_types=woods,
            item_types=items,
            products=products,
            failed=failed,
        )

    def project_catalog(self, snapshot: CatalogSnapshot) -> list[DisplayProduct]:
        """Project and order every product in a snapshot."""
        wood_lookup = build_lookup(snapshot.wood_types)
        item_lookup = build_lookup(snapshot.item_types)

        projected = [
            project(raw, wood_lookup, item_lookup, resolve_url=self._resolver)
            for raw in snapshot.products
        ]
        return sort_products(projected)

    async def gallery(self, selection: FilterSelection) -> GalleryView:
        """Build the gallery for a filter selection.

        Args:
            selection: Decoded filter selection

        Returns:
            GalleryView with visible products and the active filter options
        """
        snapshot = await self.load_catalog()
        products = self.project_catalog(snapshot)
        visible = apply_filters(products, selection)

        item_options = [e for e in snapshot.item_types if e.is_active]
        unfilterable = [e.name for e in item_options if e.name not in ITEM_TYPES]
        if unfilterable:
            logger.warning("Item types outside the filterable set are not offered", names=unfilterable)

        logger.info(
            "Gallery built",
            total=len(products),
            visible=len(visible),
            failed=list(snapshot.failed),
        )

        return GalleryView(
            selection=selection,
            products=visible,
            total=len(products),
            wood_options=[e for e in snapshot.wood_types if e.is_active],
            item_options=item_options,
            load_failed=snapshot.load_failed,
        )

    async def product(self, product_id: str) -> DisplayProduct | None:
        """Project a single product for its detail page.

        Returns:
            DisplayProduct, or None when it does not exist or could not be read
        """
        (woods, _), (items, _), (raw, _) = await asyncio.gather(
            self._read("wood_types", lambda repo: repo.list_types("wood", active_only=False), []),
            self._read("item_types", lambda repo: repo.list_types("item", active_only=False), []),
            self._read("product", lambda repo: repo.get_product(product_id), None),
        )

        if raw is None:
            logger.info("Product not found", product_id=product_id)
            return None

        return project(raw, build_lookup(woods), build_lookup(items), resolve_url=self._resolver)

    async def lookups(self, kind: str) -> list[LookupEntry]:
        """Active entries of one lookup table; empty when the read fails.

        Raises:
            ValueError: If kind is not "wood" or "item"
        """
        lookup_model(kind)
        entries, _ = await self._read(f"{kind}_types", lambda repo: repo.list_types(kind), [])
        return entries
