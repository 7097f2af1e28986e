"""
Services module initialization
"""

from .air_service import AirService
from .passenger_meta import add_passenger_meta

__all__ = [
    'AirService',
    'add_passenger_meta',
]
