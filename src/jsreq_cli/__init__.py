# jsreq CLI - Core Package
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jsreq")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
