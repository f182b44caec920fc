#!/usr/bin/env python3
"""Seed product catalog script.

Generates brands, categories and products with consistent
back-references and saves them to the configured database.

Usage:
    python scripts/seed_catalog.py --mode small
    python scripts/seed_catalog.py --mode full --clear
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete

from comfy.catalog.generator import CatalogGenerator, GeneratorConfig
from comfy.catalog.models import BrandModel, CategoryModel, ProductModel
from comfy.infrastructure.database import Base, async_session_factory, engine


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed(mode: str, clear: bool) -> dict:
    """Generate and save a sample catalog.

    Args:
        mode: Catalog size (small/full).
        clear: Whether to delete existing catalog records first.

    Returns:
        Seeding result with counts.
    """
    config = GeneratorConfig.full() if mode == "full" else GeneratorConfig.small()
    catalog = CatalogGenerator(config).generate()

    async with async_session_factory() as session:
        if clear:
            for model in (ProductModel, BrandModel, CategoryModel):
                await session.execute(delete(model))

        session.add_all([*catalog.brands, *catalog.categories, *catalog.products])
        await session.commit()

    return {
        "brands": len(catalog.brands),
        "categories": len(catalog.categories),
        "products": len(catalog.products),
    }


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the product catalog")
    parser.add_argument(
        "--mode",
        choices=["small", "full"],
        default="small",
        help="Catalog size: small (~30 products) or full (~120 products)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing products, brands and categories first",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Comfy Catalog Seeder")
    print("=" * 60)
    print(f"Mode: {args.mode}")
    print(f"Clear existing: {args.clear}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed(args.mode, args.clear)
    print(f"  ✓ Brands: {result['brands']}")
    print(f"  ✓ Categories: {result['categories']}")
    print(f"  ✓ Products: {result['products']}")
    print()

    await engine.dispose()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
