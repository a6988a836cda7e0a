"""
mqclient library exceptions.

This module defines all custom exceptions used throughout the library.
"""


class MQError(Exception):
    """Base exception for message-queue client errors"""
    pass


class ValidationError(MQError, ValueError):
    """Raised when a topic, message or client argument is invalid"""
    pass


class ConfigurationError(MQError):
    """Raised when configuration is invalid"""
    pass


class CommunicationError(MQError):
    """Raised when the exchange with the broker fails"""
    pass


class BrokerTimeoutError(CommunicationError):
    """Raised when the broker does not answer in time"""
    pass


class BrokerConnectionError(CommunicationError):
    """Raised when the broker cannot be reached or drops the connection"""
    pass


class MalformedResponseError(CommunicationError):
    """Raised when the broker's reply cannot be decoded"""
    pass


class NoMessageAvailable(MQError):
    """Raised by receive when the broker had nothing to deliver"""

    def __init__(self, message: str = "No message was received from the broker", broker_message: str | None = None):
        super().__init__(message)
        self.broker_message = broker_message
