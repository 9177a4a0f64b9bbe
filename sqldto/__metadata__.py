"""Metadata for the project."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ("__project__", "__version__")

__project__ = "sqldto"

try:
    __version__ = version(__project__)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
