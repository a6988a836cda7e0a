"""
Wire-level protocol implementation.

This module contains the lowest-level communication components:
- BrokerConnection - Raw TCP request/response exchange
- Request, ResponseRecord - JSON documents on the wire
- Response framing and parsing
"""

from .wire import Action, Request, ResponseRecord, ResponseFramer, WireConst
from .connection import BrokerConnection

__all__ = [
    "BrokerConnection",
    "Action",
    "Request",
    "ResponseRecord",
    "ResponseFramer",
    "WireConst",
]
