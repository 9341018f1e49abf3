# This project was developed with assistance from AI tools.
"""CLI entrypoint for service catalog seeding.

Usage:
    python -m src.seed          # Add missing service types and requirements
    python -m src.seed --force  # Replace every service's requirement list
"""

import argparse
import asyncio
import json
import logging

from db.database import SessionLocal

from .services.seed.seeder import seed_service_catalog


async def main(force: bool = False) -> dict:
    """Run catalog seeding."""
    async with SessionLocal() as session:
        result = await seed_service_catalog(session, force=force)
    print(json.dumps(result, indent=2))
    if result.get("status") == "already_seeded":
        print("\nService catalog already seeded. Use --force to reload requirement lists.")
    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Seed the Meridian service-type catalog")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace existing requirement lists",
    )
    args = parser.parse_args()
    asyncio.run(main(force=args.force))
