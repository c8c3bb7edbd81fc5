"""pkgtrack - package review coordination registry."""

__version__ = "0.1.0"
