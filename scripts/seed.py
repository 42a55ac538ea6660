"""Seed the database with the store list."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from sqlalchemy import select

from priceboard.catalog import load_store_seed
from priceboard.db.session import create_engine_from_env
from priceboard.db.tables import metadata, stores

logger = logging.getLogger("priceboard.seed")


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    engine = create_engine_from_env()
    metadata.create_all(engine)
    with engine.begin() as conn:
        existing = set(conn.execute(select(stores.c.name)).scalars())
        for store in load_store_seed():
            if store.name in existing:
                continue
            conn.execute(stores.insert().values(name=store.name, sort_order=store.sort_order))
            logger.info("Added store %s", store.name)
    print("Seed complete")


if __name__ == "__main__":
    main()
