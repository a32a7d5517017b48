"""
Vitrine Backend: ORM Models
=============================

One module per record kind. Importing this package registers every table
with `Base.metadata` (Alembic autogenerate and the test fixtures rely on it).
"""

from vitrine.models.package import Package
from vitrine.models.project import Project
from vitrine.models.submission import Submission
from vitrine.models.user import User

__all__ = ["Package", "Project", "Submission", "User"]
