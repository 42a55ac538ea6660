"""Catalog helpers."""

from __future__ import annotations

import pathlib

import yaml

from priceboard.catalog.models import Store

STORES_PATH = pathlib.Path(__file__).with_name("stores.yml")


def load_store_seed(limit: int | None = None) -> list[Store]:
    data = yaml.safe_load(STORES_PATH.read_text())
    stores = [
        Store(id=idx, name=item["name"], sort_order=item.get("sort_order", idx))
        for idx, item in enumerate(data, start=1)
    ]
    if limit:
        return stores[:limit]
    return stores
