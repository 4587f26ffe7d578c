"""CFB Loyalty Index."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cfb-loyalty-index")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
