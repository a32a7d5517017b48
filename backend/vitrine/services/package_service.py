"""
Vitrine Backend: Package Service
==================================

What:  The pricing catalog: list (public), one-shot seed (public), partial
       update (admin). Packages are never deleted.
"""

import logging
import uuid
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.catalog import default_package_rows
from vitrine.exceptions import AlreadyExistsError, DatabaseError, NotFoundError
from vitrine.models import Package
from vitrine.repository import Repository
from vitrine.schemas.package import PackageResponse, PackageUpdate

logger = logging.getLogger(__name__)


class PackageService:
    def __init__(self):
        self.repo = Repository(Package)

    async def list_packages(self, db: AsyncSession) -> List[PackageResponse]:
        """All packages in catalog order."""
        try:
            packages = await self.repo.find_all(db, Package.position)
        except SQLAlchemyError as e:
            logger.error("Error fetching packages: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching packages",
                context={"error_type": type(e).__name__},
            )
        return [PackageResponse.model_validate(p) for p in packages]

    async def seed_packages(self, db: AsyncSession) -> int:
        """
        Insert the default catalog. Refused when any package already exists.

        Returns:
            Number of packages created.
        """
        try:
            existing = await self.repo.count(db)
            if existing > 0:
                raise AlreadyExistsError(
                    message="Packages already seeded",
                    context={"count": existing},
                )
            created = await self.repo.insert_many(db, default_package_rows())
        except SQLAlchemyError as e:
            logger.error("Error seeding packages: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error seeding packages",
                context={"error_type": type(e).__name__},
            )
        logger.info("Seeded %d packages", len(created))
        return len(created)

    async def update_package(
        self, db: AsyncSession, package_id: uuid.UUID, data: PackageUpdate
    ) -> PackageResponse:
        """
        Write only the fields present in the request body and return the
        updated package.

        Raises:
            NotFoundError: no package with this id.
        """
        changes = data.model_dump(exclude_unset=True)
        try:
            package = await self.repo.update_by_id(db, package_id, **changes)
        except SQLAlchemyError as e:
            logger.error("Error updating package %s: %s", package_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error updating package",
                context={"package_id": str(package_id)},
            )

        if package is None:
            raise NotFoundError(resource="package", resource_id=str(package_id))

        logger.info("Package %s updated: %s", package_id, sorted(changes))
        return PackageResponse.model_validate(package)


package_service = PackageService()
