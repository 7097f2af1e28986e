"""
GDS Air Service

Airline booking workflows (search, price, book, ticket, exchange, cancel)
against a GDS API, with a terminal emulation channel used to recover from
failures the API cannot handle on its own.
"""

__version__ = "1.0.0"
__author__ = "GDS Air Service Team"
