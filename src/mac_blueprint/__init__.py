"""mac-blueprint: snapshot and reconcile a Mac's installed software."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mac-blueprint")
except PackageNotFoundError:
    __version__ = "0.0.0"
