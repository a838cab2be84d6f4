"""Gallery, product and lookup response schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

from woodshop.core.filters import (
    ITEM_TYPE_LABELS,
    ITEM_TYPES,
    SIZE_LABELS,
    SIZES,
    FilterSelection,
    count_active,
    encode,
    is_default,
)
from woodshop.core.projection import DisplayProduct
from woodshop.services.catalog_repository import LookupEntry
from woodshop.services.gallery_service import GalleryView


class FilterSelectionOut(BaseModel):
    """Decoded filter selection."""

    in_stock_only: bool = True
    item_types: list[str] = Field(default_factory=list)
    size: str | None = None
    wood_types: list[str] = Field(default_factory=list)

    @classmethod
    def from_selection(cls, selection: FilterSelection) -> "FilterSelectionOut":
        return cls(
            in_stock_only=selection.in_stock_only,
            item_types=list(selection.item_types),
            size=selection.size,
            wood_types=list(selection.wood_types),
        )


class FilterOption(BaseModel):
    """Selectable filter value with its display label."""

    value: str
    label: str


class FilterOptions(BaseModel):
    """Options shown in the filter panel."""

    item_types: list[FilterOption] = Field(default_factory=list)
    sizes: list[FilterOption] = Field(default_factory=list)
    wood_types: list[FilterOption] = Field(default_factory=list)


class ProductOut(BaseModel):
    """Display-ready product."""

    id: str
    name: str
    description: str = ""
    materials: str = ""
    dimensions: str = ""
    weight: str = ""
    care_instructions: str = ""
    price_cents: int = Field(ge=0)
    price: Decimal
    price_display: str
    buy_url: str = ""
    wood_type: str = ""
    item_type: str = ""
    item_type_label: str = ""
    size: str = ""
    size_label: str = ""
    images: list[str] = Field(default_factory=list)
    cover_image: str | None = None
    in_stock: bool
    sold_out: bool

    @classmethod
    def from_display(cls, product: DisplayProduct) -> "ProductOut":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            materials=product.materials,
            dimensions=product.dimensions,
            weight=product.weight,
            care_instructions=product.care_instructions,
            price_cents=product.price_cents,
            price=product.price,
            price_display=product.price_display,
            buy_url=product.buy_url,
            wood_type=product.wood_type,
            item_type=product.item_type,
            item_type_label=ITEM_TYPE_LABELS.get(product.item_type, product.item_type),
            size=product.size,
            size_label=SIZE_LABELS.get(product.size, product.size),
            images=list(product.images),
            cover_image=product.cover_image,
            in_stock=product.in_stock,
            sold_out=product.sold_out,
        )


class LookupEntryOut(BaseModel):
    """Active wood or item type entry."""

    id: str
    name: str
    sort_order: int

    @classmethod
    def from_entry(cls, entry: LookupEntry) -> "LookupEntryOut":
        return cls(id=entry.id, name=entry.name, sort_order=entry.sort_order)


class GalleryResponse(BaseModel):
    """Filtered gallery with the state needed to render the filter panel."""

    filters: FilterSelectionOut
    query: str = Field(description="Canonical query string for the current filters")
    active_filter_count: int
    is_default: bool
    options: FilterOptions
    total: int = Field(description="Products before filtering")
    count: int = Field(description="Products after filtering")
    products: list[ProductOut]
    load_failed: bool = Field(
        default=False,
        description="A catalog read failed and was treated as empty",
    )

    @classmethod
    def from_view(cls, view: GalleryView) -> "GalleryResponse":
        selection = view.selection
        return cls(
            filters=FilterSelectionOut.from_selection(selection),
            query=encode(selection),
            active_filter_count=count_active(selection),
            is_default=is_default(selection),
            options=FilterOptions(
                item_types=[
                    FilterOption(value=e.name, label=ITEM_TYPE_LABELS.get(e.name, e.name))
                    for e in view.item_options
                    if e.name in ITEM_TYPES
                ],
                sizes=[FilterOption(value=s, label=SIZE_LABELS[s]) for s in SIZES],
                wood_types=[FilterOption(value=e.name, label=e.name) for e in view.wood_options],
            ),
            total=view.total,
            count=view.count,
            products=[ProductOut.from_display(p) for p in view.products],
            load_failed=view.load_failed,
        )
