"""Variant labels, sort keys and the board search filter."""

from __future__ import annotations

from priceboard.catalog.models import ProductVariant


def _size_text(variant: ProductVariant) -> str:
    return str(variant.size) if variant.size else ""


def search_text(variant: ProductVariant) -> str:
    return f"{variant.brand_name} {variant.product_name} {_size_text(variant)} {variant.flavour or ''}"


def matches(variant: ProductVariant, query: str | None) -> bool:
    q = (query or "").strip().lower()
    if not q:
        return True
    return q in search_text(variant).lower()


def variant_sort_key(variant: ProductVariant) -> str:
    return f"{variant.product_name} {variant.brand_name} {_size_text(variant)} {variant.flavour or ''}".lower()


def variant_label(variant: ProductVariant) -> str:
    parts = [variant.brand_name, variant.product_name]
    if variant.size:
        parts.append(str(variant.size))
    if variant.flavour:
        parts.append(variant.flavour)
    return " — ".join(parts)
