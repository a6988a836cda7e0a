"""
API-level models and client implementation.

This module contains models and classes that belong to the API layer:
- Topic, Message (validated value types)
- MQClient (implements the broker operations using mqclient.io)
"""

from .models import Topic, Message
from .client import MQClient

__all__ = [
    # API-level models
    "Topic",
    "Message",

    # API-level client
    "MQClient",
]
