"""pgrules: compile Postgres best-practice rule documents into a reference guide."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pgrules")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
