"""
Interface definitions for GDS air service components
"""

from .gds_api import GDSAPIInterface
from .terminal import TerminalInterface, TerminalFactory

__all__ = [
    "GDSAPIInterface",
    "TerminalInterface",
    "TerminalFactory",
]
