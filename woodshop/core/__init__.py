"""Core module - filter state codec and product projection."""

from woodshop.core.filters import (
    DEFAULT_SELECTION,
    FilterSelection,
    count_active,
    decode,
    encode,
    is_default,
)
from woodshop.core.projection import (
    DisplayProduct,
    apply_filters,
    build_lookup,
    project,
    sort_products,
)

__all__ = [
    "DEFAULT_SELECTION",
    "FilterSelection",
    "count_active",
    "decode",
    "encode",
    "is_default",
    "DisplayProduct",
    "apply_filters",
    "build_lookup",
    "project",
    "sort_products",
]
