"""
Vitrine Backend: Admin Bootstrap CLI
======================================

Creates the bootstrap admin account from the command line, outside the HTTP
server:

    vitrine-seed-admin
    python -m vitrine.seed

Exit status:
    0   admin created, or it already existed
    1   the database could not be reached or written
"""

import asyncio
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from vitrine.config import settings
from vitrine.database import async_session_factory, dispose_engine
from vitrine.exceptions import AlreadyExistsError, VitrineError
from vitrine.services.auth_service import ADMIN_PASSWORD, ADMIN_USERNAME, auth_service

logger = logging.getLogger("vitrine.seed")


async def seed_admin() -> int:
    try:
        async with async_session_factory() as session:
            try:
                await auth_service.seed_admin(session)
                await session.commit()
            except AlreadyExistsError:
                print("Admin user already exists")
                return 0
        print(f"Admin user created. Username: {ADMIN_USERNAME}, Password: {ADMIN_PASSWORD}")
        return 0
    except VitrineError as e:
        logger.error("Seeding failed: %s | Context: %s", e.message, e.context)
        print(f"Error seeding admin: {e.message}", file=sys.stderr)
        return 1
    except (SQLAlchemyError, OSError) as e:
        logger.error("Seeding failed: %s", str(e), exc_info=True)
        print(f"Error seeding admin: {e}", file=sys.stderr)
        return 1
    finally:
        await dispose_engine()


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(seed_admin()))


if __name__ == "__main__":
    main()
