"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from pkgtrack.db.models.packager import PackagerRow
from pkgtrack.db.models.package import PackageRow
from pkgtrack.db.models.assignment import AssignmentRow
from pkgtrack.db.models.mark import MarkRow
from pkgtrack.db.models.relation import PackageRelationRow

__all__ = [
    "PackagerRow",
    "PackageRow",
    "AssignmentRow",
    "MarkRow",
    "PackageRelationRow",
]
