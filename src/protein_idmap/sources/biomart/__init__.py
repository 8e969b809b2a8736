"""BioMart access: registry listings, attribute queries and connections."""

from .client import BioMartClient
from .connection import MartConnection, load_mart, version_report_path, write_version_report
from .parser import DatasetInfo, MartInfo

__all__ = [
    "BioMartClient",
    "DatasetInfo",
    "MartConnection",
    "MartInfo",
    "load_mart",
    "version_report_path",
    "write_version_report",
]
