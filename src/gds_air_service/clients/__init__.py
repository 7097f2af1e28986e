"""
API clients for the GDS
"""

from .gds_api_client import GDSAPIClient
from .terminal_client import TerminalClient

__all__ = [
    "GDSAPIClient",
    "TerminalClient",
]
