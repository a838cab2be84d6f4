"""Gallery filter state and its URL query-string form.

The gallery keeps its filter selection in the URL so filtered views can be
shared and survive reloads. Recognized query keys:

    inStock  "0" shows sold-out pieces too (default: in-stock only)
    type     comma list of item type identifiers
    size     one of small / medium / large
    wood     comma list of wood type names

Only non-default fields are written, so the default view has an empty query
string. Decoding is total: unknown keys are ignored and malformed values
fall back to the field default.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Literal
from urllib.parse import parse_qsl, urlencode

ItemTypeKey = Literal["small_goods", "tables", "cabinets"]
Size = Literal["small", "medium", "large"]

ITEM_TYPES: tuple[ItemTypeKey, ...] = ("small_goods", "tables", "cabinets")
SIZES: tuple[Size, ...] = ("small", "medium", "large")

ITEM_TYPE_LABELS: dict[str, str] = {
    "small_goods": "Small Goods",
    "tables": "Tables",
    "cabinets": "Cabinets",
}

SIZE_LABELS: dict[str, str] = {
    "small": "Small",
    "medium": "Medium",
    "large": "Large",
}

PARAM_IN_STOCK = "inStock"
PARAM_TYPE = "type"
PARAM_SIZE = "size"
PARAM_WOOD = "wood"

IN_STOCK_OFF = "0"
LIST_SEPARATOR = ","


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _unique_casefold(values: Iterable[str]) -> tuple[str, ...]:
    """Drop names equal to an earlier one ignoring case; the first spelling is kept."""
    seen: dict[str, str] = {}
    for value in values:
        seen.setdefault(value.casefold(), value)
    return tuple(seen.values())


@dataclass(frozen=True)
class FilterSelection:
    """Immutable gallery filter selection.

    Attributes:
        in_stock_only: Hide sold-out pieces
        item_types: Selected item type identifiers (empty = any)
        size: Selected size, or None for any
        wood_types: Selected wood type names, unique ignoring case (empty = any)
    """

    in_stock_only: bool = True
    item_types: tuple[str, ...] = field(default_factory=tuple)
    size: str | None = None
    wood_types: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the value hashable and comparable
        object.__setattr__(self, "item_types", _unique(self.item_types))
        object.__setattr__(self, "wood_types", _unique_casefold(self.wood_types))


DEFAULT_SELECTION = FilterSelection()


# =============================================================================
# Decoding
# =============================================================================


def _first(value: Any) -> str | None:
    """Reduce a raw parameter value to a single string."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return value if isinstance(value, str) else None


def _params_from(params: str | Mapping[str, Any] | None) -> dict[str, str | None]:
    keys = (PARAM_IN_STOCK, PARAM_TYPE, PARAM_SIZE, PARAM_WOOD)

    if params is None:
        return {}

    if isinstance(params, str):
        found: dict[str, str | None] = {}
        # First occurrence wins, like URLSearchParams.get
        for key, value in parse_qsl(params.lstrip("?"), keep_blank_values=True):
            if key in keys and key not in found:
                found[key] = value
        return found

    if isinstance(params, Mapping):
        # Multi-value mappings (Starlette QueryParams) return the last value
        # from .get(), so read the first one explicitly.
        getlist = getattr(params, "getlist", None)
        if callable(getlist):
            return {key: _first(getlist(key)) for key in keys if key in params}
        return {key: _first(params.get(key)) for key in keys if key in params}

    return {}


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    tokens = (token.strip() for token in value.split(LIST_SEPARATOR))
    return [token for token in tokens if token]


def decode(params: str | Mapping[str, Any] | None) -> FilterSelection:
    """Build a FilterSelection from query parameters.

    Args:
        params: Raw query string (leading "?" optional) or a mapping such as
            Starlette's QueryParams

    Returns:
        Decoded selection. Never raises; bad input degrades to defaults.
    """
    raw = _params_from(params)

    in_stock_raw = raw.get(PARAM_IN_STOCK)
    in_stock_only = in_stock_raw is None or in_stock_raw != IN_STOCK_OFF

    item_types = [token for token in _split(raw.get(PARAM_TYPE)) if token in ITEM_TYPES]

    size_raw = raw.get(PARAM_SIZE)
    size = size_raw if size_raw in SIZES else None

    wood_types = _split(raw.get(PARAM_WOOD))

    return FilterSelection(
        in_stock_only=in_stock_only,
        item_types=tuple(item_types),
        size=size,
        wood_types=tuple(wood_types),
    )


# =============================================================================
# Encoding
# =============================================================================


def encode(selection: FilterSelection) -> str:
    """Serialize a selection to its canonical query string.

    Fields equal to their default are omitted, so the default selection
    encodes to "". The result has no leading "?".
    """
    pairs: list[tuple[str, str]] = []

    if not selection.in_stock_only:
        pairs.append((PARAM_IN_STOCK, IN_STOCK_OFF))

    if selection.item_types:
        pairs.append((PARAM_TYPE, LIST_SEPARATOR.join(selection.item_types)))

    if selection.size:
        pairs.append((PARAM_SIZE, selection.size))

    if selection.wood_types:
        pairs.append((PARAM_WOOD, LIST_SEPARATOR.join(selection.wood_types)))

    return urlencode(pairs)


# =============================================================================
# Derived values
# =============================================================================


def count_active(selection: FilterSelection) -> int:
    """Number of active filter chips.

    Showing sold-out pieces counts as one active filter since in-stock-only
    is the default.
    """
    count = 0
    if not selection.in_stock_only:
        count += 1
    count += len(selection.item_types)
    if selection.size:
        count += 1
    count += len(selection.wood_types)
    return count


def is_default(selection: FilterSelection) -> bool:
    """Whether the selection matches the default (no "clear filters" needed)."""
    return selection == DEFAULT_SELECTION


# =============================================================================
# Selection updates (filter panel interactions)
# =============================================================================


def _toggle(values: tuple[str, ...], value: str) -> tuple[str, ...]:
    if value in values:
        return tuple(v for v in values if v != value)
    return (*values, value)


def toggle_item_type(selection: FilterSelection, item_type: str) -> FilterSelection:
    """Add or remove an item type. Unknown identifiers leave the selection unchanged."""
    if item_type not in ITEM_TYPES:
        return selection
    return replace(selection, item_types=_toggle(selection.item_types, item_type))


def toggle_wood_type(selection: FilterSelection, wood_type: str) -> FilterSelection:
    """Add or remove a wood type name.

    Names compare case-insensitively, the same way products are matched, so
    toggling "walnut" removes a selected "Walnut".
    """
    wood_type = wood_type.strip()
    if not wood_type or LIST_SEPARATOR in wood_type:
        return selection
    key = wood_type.casefold()
    if any(w.casefold() == key for w in selection.wood_types):
        remaining = tuple(w for w in selection.wood_types if w.casefold() != key)
        return replace(selection, wood_types=remaining)
    return replace(selection, wood_types=(*selection.wood_types, wood_type))


def with_size(selection: FilterSelection, size: str | None) -> FilterSelection:
    """Select a size; selecting the current size again clears it."""
    if size is None or size == selection.size:
        return replace(selection, size=None)
    if size not in SIZES:
        return selection
    return replace(selection, size=size)


def with_in_stock_only(selection: FilterSelection, in_stock_only: bool) -> FilterSelection:
    return replace(selection, in_stock_only=in_stock_only)
