"""Shared fixtures: sample catalog, fake repository, gallery service, HTTP client."""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from woodshop.infra.storage import ImageResolver
from woodshop.services.catalog_repository import LookupEntry
from woodshop.services.gallery_service import GalleryService

PUBLIC_BASE = "https://project.supabase.co/storage/v1/object/public/products"


def _ts(day: int) -> datetime:
    return datetime(2025, 3, day, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def wood_types() -> list[LookupEntry]:
    return [
        LookupEntry(id="wood-walnut", name="Walnut", sort_order=1),
        LookupEntry(id="wood-maple", name="Maple", sort_order=2),
        LookupEntry(id="wood-oak", name="Oak", sort_order=3),
        LookupEntry(id="wood-cherry", name="Cherry", sort_order=4, is_active=False),
    ]


@pytest.fixture
def item_types() -> list[LookupEntry]:
    return [
        LookupEntry(id="item-small", name="small_goods", sort_order=1),
        LookupEntry(id="item-tables", name="tables", sort_order=2),
        LookupEntry(id="item-cabinets", name="cabinets", sort_order=3),
    ]


@pytest.fixture
def product_rows() -> list[dict[str, Any]]:
    """Five products, two of them sold out."""
    return [
        {
            "id": "p1",
            "name": "Walnut Cutting Board",
            "description": "End-grain board.",
            "materials": "Black walnut, mineral oil",
            "dimensions": '18" x 12" x 1.5"',
            "weight": "6 lbs",
            "care_instructions": "Hand wash only.",
            "price_cents": 4500,
            "buy_url": "https://etsy.example/listing/1",
            "wood_type_id": "wood-walnut",
            "item_type_id": "item-small",
            "size_label": "small",
            "image_urls": ["boards/p1-a.jpg", "https://cdn.example/p1-b.jpg"],
            "image_url": None,
            "is_in_stock": True,
            "sort_order": 1,
            "created_at": _ts(1),
        },
        {
            "id": "p2",
            "name": "Oak Dining Table",
            "description": None,
            "materials": None,
            "dimensions": None,
            "weight": None,
            "care_instructions": None,
            "price_cents": 185000,
            "buy_url": None,
            "wood_type_id": "wood-oak",
            "item_type_id": "item-tables",
            "size_label": "large",
            "image_urls": None,
            "image_url": "tables/p2.jpg",
            "is_in_stock": True,
            "sort_order": 2,
            "created_at": _ts(2),
        },
        {
            "id": "p3",
            "name": "Maple Cabinet",
            "price_cents": 92000,
            "wood_type_id": "wood-maple",
            "item_type_id": "item-cabinets",
            "size_label": "medium",
            "image_urls": [],
            "image_url": None,
            "is_in_stock": False,
            "sort_order": None,
            "created_at": _ts(5),
        },
        {
            "id": "p4",
            "name": "Walnut Side Table",
            "price_cents": 61000,
            "wood_type_id": "wood-walnut",
            "item_type_id": "item-tables",
            "size_label": "medium",
            "image_urls": ["tables/p4.jpg"],
            "is_in_stock": False,
            "sort_order": None,
            "created_at": _ts(4),
        },
        {
            "id": "p5",
            "name": "Mystery Box",
            "price_cents": 3000,
            "wood_type_id": "wood-deleted",
            "item_type_id": None,
            "size_label": "small",
            "is_in_stock": True,
            "sort_order": None,
            "created_at": _ts(3),
        },
    ]


@dataclass
class FakeCatalog:
    """In-memory stand-in for CatalogRepository reads."""

    woods: list[LookupEntry]
    items: list[LookupEntry]
    products: list[dict[str, Any]]
    failing: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def repository(self, session: Any) -> "FakeCatalogRepository":
        return FakeCatalogRepository(self)


class FakeCatalogRepository:
    def __init__(self, catalog: FakeCatalog) -> None:
        self._catalog = catalog

    def _check(self, name: str) -> None:
        self._catalog.calls.append(name)
        if name in self._catalog.failing:
            raise ConnectionError(f"{name} read failed")

    async def list_types(self, kind: str, active_only: bool = True) -> list[LookupEntry]:
        self._check(f"{kind}_types")
        entries = self._catalog.woods if kind == "wood" else self._catalog.items
        return [e for e in entries if e.is_active or not active_only]

    async def list_products(self) -> list[dict[str, Any]]:
        self._check("products")
        return list(self._catalog.products)

    async def get_product(self, product_id: str) -> dict[str, Any] | None:
        self._check("product")
        return next((p for p in self._catalog.products if p["id"] == product_id), None)


@pytest.fixture
def catalog(
    monkeypatch: pytest.MonkeyPatch,
    wood_types: list[LookupEntry],
    item_types: list[LookupEntry],
    product_rows: list[dict[str, Any]],
) -> FakeCatalog:
    """Replace the repository used by GalleryService with an in-memory catalog."""
    fake = FakeCatalog(woods=wood_types, items=item_types, products=product_rows)
    monkeypatch.setattr(
        "woodshop.services.gallery_service.CatalogRepository",
        fake.repository,
    )
    return fake


@asynccontextmanager
async def fake_session_factory() -> AsyncGenerator[MagicMock, None]:
    yield MagicMock()


@pytest.fixture
def resolver() -> ImageResolver:
    return ImageResolver(public_base=PUBLIC_BASE)


@pytest.fixture
def gallery_service(catalog: FakeCatalog, resolver: ImageResolver) -> GalleryService:
    return GalleryService(session_factory=fake_session_factory, resolver=resolver)


@pytest_asyncio.fixture
async def client(gallery_service: GalleryService) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with the gallery service overridden."""
    from woodshop.api.deps import get_gallery_service
    from woodshop.main import app

    app.dependency_overrides[get_gallery_service] = lambda: gallery_service
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
