"""String enums for registry values."""

from enum import StrEnum


class PackageState(StrEnum):
    """Read-time projection of a package's workflow position.

    An assigned package with nothing blocking it projects straight to READY.
    """

    UNASSIGNED = "unassigned"
    BLOCKED = "blocked"
    READY = "ready"
