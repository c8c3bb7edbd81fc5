"""Custom exception classes for the package registry."""


class PkgTrackError(Exception):
    """Base exception for pkgtrack."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(PkgTrackError):
    """Request validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class UnknownPackageError(PkgTrackError):
    """Referenced package does not exist."""

    def __init__(self, package_id: int | str):
        super().__init__(
            "UNKNOWN_PACKAGE",
            f"Package '{package_id}' not found",
            details={"package_id": package_id},
            status_code=404,
        )
        self.package_id = package_id


class UnknownPackagerError(PkgTrackError):
    """Referenced packager does not exist."""

    def __init__(self, packager_id: int):
        super().__init__(
            "UNKNOWN_PACKAGER",
            f"Packager '{packager_id}' not found",
            details={"packager_id": packager_id},
            status_code=404,
        )
        self.packager_id = packager_id


class SelfDependencyError(PkgTrackError):
    """A package cannot require itself."""

    def __init__(self, package_id: int):
        super().__init__(
            "SELF_DEPENDENCY",
            f"Package '{package_id}' cannot depend on itself",
            details={"package_id": package_id},
            status_code=400,
        )
        self.package_id = package_id


class CyclicDependencyError(PkgTrackError):
    """The relation graph reachable from a package contains a cycle."""

    def __init__(self, package_id: int, cycle: list[int]):
        path = " -> ".join(str(p) for p in cycle)
        super().__init__(
            "CYCLIC_DEPENDENCY",
            f"Dependency cycle reachable from package '{package_id}': {path}",
            details={"package_id": package_id, "cycle": cycle},
            status_code=409,
        )
        self.package_id = package_id
        self.cycle = cycle


class ConstraintViolationError(PkgTrackError):
    """Write rejected by a referential or workflow constraint."""

    def __init__(self, message: str, details=None):
        super().__init__("CONSTRAINT_VIOLATION", message, details, status_code=409)
