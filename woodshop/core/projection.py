"""Product projection and gallery filtering.

Raw product rows are joined against the wood/item type lookups and
normalized once into a fully-defaulted DisplayProduct, so views never have
to null-check. Filtering works on those projected products and never
reorders them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol

from woodshop.core.filters import FilterSelection

ImageUrlResolver = Callable[[str], str]

CENTS_PER_UNIT = 100


class LookupRow(Protocol):
    id: str
    name: str


@dataclass(frozen=True)
class DisplayProduct:
    """Display-ready product.

    Text fields are never None; unclassified products carry "" as their wood
    and item type names. Price stays in integer cents; the decimal amount is
    only produced for display.
    """

    id: str
    name: str
    description: str = ""
    materials: str = ""
    dimensions: str = ""
    weight: str = ""
    care_instructions: str = ""
    price_cents: int = 0
    buy_url: str = ""
    wood_type: str = ""
    item_type: str = ""
    size: str = ""
    images: tuple[str, ...] = field(default_factory=tuple)
    in_stock: bool = True
    sort_order: int | None = None
    created_at: datetime | None = None

    @property
    def sold_out(self) -> bool:
        return not self.in_stock

    @property
    def cover_image(self) -> str | None:
        """First image, or None when the card should show a placeholder."""
        return self.images[0] if self.images else None

    @property
    def price(self) -> Decimal:
        return Decimal(self.price_cents) / CENTS_PER_UNIT

    @property
    def price_display(self) -> str:
        return f"${self.price:,.2f}"


# =============================================================================
# Lookups
# =============================================================================


def build_lookup(entries: Iterable[LookupRow | Mapping[str, Any]]) -> dict[str, str]:
    """Map lookup ids to display names.

    Duplicate ids resolve last-write-wins. Entries without an id are skipped.
    """
    lookup: dict[str, str] = {}
    for entry in entries:
        if isinstance(entry, Mapping):
            entry_id, name = entry.get("id"), entry.get("name")
        else:
            entry_id, name = getattr(entry, "id", None), getattr(entry, "name", None)
        if entry_id is None:
            continue
        lookup[str(entry_id)] = name or ""
    return lookup


def _resolve_name(lookup: Mapping[str, str], ref: Any) -> str:
    if ref is None:
        return ""
    return lookup.get(str(ref), "")


# =============================================================================
# Field normalization
# =============================================================================


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _cents(value: Any) -> int:
    """Stored price in cents; anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0
    try:
        cents = int(value)
    except (TypeError, ValueError):
        return 0
    return cents if cents >= 0 else 0


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def resolve_images(raw: Mapping[str, Any]) -> list[str]:
    """Image references for a product row, cover image first.

    A non-empty `image_urls` sequence wins; otherwise a non-empty legacy
    `image_url` becomes a one-element list. Blank references are dropped.
    """
    images = raw.get("image_urls")
    if isinstance(images, str):
        images = [images]
    if isinstance(images, Sequence):
        refs = [ref.strip() for ref in images if isinstance(ref, str) and ref.strip()]
        if refs:
            return refs

    single = raw.get("image_url")
    if isinstance(single, str) and single.strip():
        return [single.strip()]
    return []


def project(
    raw: Mapping[str, Any],
    wood_lookup: Mapping[str, str],
    item_lookup: Mapping[str, str],
    resolve_url: ImageUrlResolver | None = None,
) -> DisplayProduct:
    """Project a raw product row into a DisplayProduct.

    Args:
        raw: Product row as stored (missing keys are tolerated)
        wood_lookup: Wood type id -> name
        item_lookup: Item type id -> name
        resolve_url: Optional resolver turning stored image references into
            fetchable URLs

    Returns:
        Fully-defaulted DisplayProduct
    """
    images = resolve_images(raw)
    if resolve_url is not None:
        images = [url for url in (resolve_url(ref) for ref in images) if url]

    in_stock = raw.get("is_in_stock")

    return DisplayProduct(
        id=_text(raw.get("id")),
        name=_text(raw.get("name")),
        description=_text(raw.get("description")),
        materials=_text(raw.get("materials")),
        dimensions=_text(raw.get("dimensions")),
        weight=_text(raw.get("weight")),
        care_instructions=_text(raw.get("care_instructions")),
        price_cents=_cents(raw.get("price_cents")),
        buy_url=_text(raw.get("buy_url")),
        wood_type=_resolve_name(wood_lookup, raw.get("wood_type_id")),
        item_type=_resolve_name(item_lookup, raw.get("item_type_id")),
        size=_text(raw.get("size_label")),
        images=tuple(images),
        in_stock=True if in_stock is None else bool(in_stock),
        sort_order=_optional_int(raw.get("sort_order")),
        created_at=raw.get("created_at") if isinstance(raw.get("created_at"), datetime) else None,
    )


# =============================================================================
# Ordering and filtering
# =============================================================================


def sort_products(products: Iterable[DisplayProduct]) -> list[DisplayProduct]:
    """Gallery order: explicit sort_order ascending (unset last), then newest first."""
    ordered = sorted(
        products,
        key=lambda p: p.created_at.timestamp() if p.created_at else float("-inf"),
        reverse=True,
    )
    # Stable second pass keeps the recency order within equal sort keys
    return sorted(
        ordered,
        key=lambda p: (p.sort_order is None, p.sort_order if p.sort_order is not None else 0),
    )


def matches(product: DisplayProduct, selection: FilterSelection) -> bool:
    """Whether a product passes every active filter."""
    if selection.in_stock_only and product.sold_out:
        return False

    if selection.item_types and product.item_type not in selection.item_types:
        return False

    if selection.size and product.size != selection.size:
        return False

    if selection.wood_types:
        wood = product.wood_type.casefold()
        if not wood or not any(w.casefold() == wood for w in selection.wood_types):
            return False

    return True


def apply_filters(
    products: Iterable[DisplayProduct],
    selection: FilterSelection,
) -> list[DisplayProduct]:
    """Products passing the selection, in input order."""
    return [product for product in products if matches(product, selection)]
