#!/usr/bin/env python3
"""Seed product catalogue script.

Generates the deterministic demo catalogue and writes it to the configured
product store (set STORE_BACKEND=firestore and the FIREBASE_* variables to
target a real project).

Usage:
    python scripts/seed_catalogue.py --mode small
    python scripts/seed_catalogue.py --mode full --clear
"""

import argparse
import asyncio

from catalogue.application.catalogue_service import CatalogueService
from catalogue.infrastructure.config import settings
from catalogue.infrastructure.gateway import close_gateway, get_gateway
from catalogue.infrastructure.logging_setup import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalogue with demo products",
    )
    parser.add_argument(
        "--mode",
        choices=["small", "full"],
        default="small",
        help="Catalogue size: small (~15 products) or full (~50 products)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing products before seeding",
    )

    args = parser.parse_args()
    configure_logging()

    print("=" * 60)
    print("Catalogue Seeder")
    print("=" * 60)
    print(f"Backend: {settings.store_backend}")
    print(f"Mode: {args.mode}")
    print(f"Clear existing: {args.clear}")
    print()

    service = CatalogueService(get_gateway())
    try:
        result = await service.seed_catalogue(mode=args.mode, clear_existing=args.clear)
    finally:
        await close_gateway()

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Created: {result['products_created']} products")
    print(f"  ✓ Categories: {result['categories_used']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
