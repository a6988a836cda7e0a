"""
mqclient Python Library

A Python library for talking to a message-queue broker over TCP.

This library provides two layers of abstraction:

1. **mqclient.io**: Wire-level protocol implementation (TCP exchange, JSON documents, response framing)
2. **mqclient.api**: Broker operations using mqclient.io (subscribe, unsubscribe, publish, receive)

Example usage:
    import uuid
    import mqclient

    client = mqclient.MQClient("192.168.1.100", 5000, uuid.uuid4())
    topic = mqclient.Topic("orders")
    client.subscribe(topic)
    client.publish(mqclient.Message("hello"), topic)
    try:
        print(client.receive(topic).content)
    except mqclient.NoMessageAvailable:
        print("Nothing to deliver")
"""

import logging

# API-level models and client
from .api import MQClient, Topic, Message

# Low-level models (used by mqclient.io)
from .io import BrokerConnection, Action, Request, ResponseRecord, WireConst

# Exceptions
from .exceptions import (
    MQError,
    ValidationError,
    ConfigurationError,
    CommunicationError,
    BrokerTimeoutError,
    BrokerConnectionError,
    MalformedResponseError,
    NoMessageAvailable,
)

# Application helpers
from .config import BrokerConfig, load_config
from .utils import call_with_keyboard_interrupt, run_with_keyboard_interrupt, setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Public API - these are the main classes users should import
__all__ = [
    # Client and models
    "MQClient",
    "Topic",
    "Message",

    # Low-level models (for advanced users)
    "BrokerConnection",
    "Action",
    "Request",
    "ResponseRecord",
    "WireConst",

    # Exceptions
    "MQError",
    "ValidationError",
    "ConfigurationError",
    "CommunicationError",
    "BrokerTimeoutError",
    "BrokerConnectionError",
    "MalformedResponseError",
    "NoMessageAvailable",

    # Configuration and utilities
    "BrokerConfig",
    "load_config",
    "call_with_keyboard_interrupt",
    "run_with_keyboard_interrupt",
    "setup_logging",
]
