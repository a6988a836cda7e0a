"""
mqclient API-level models.

This module contains the validated value types passed to MQClient:
- Topic, the channel a message is published to or received from
- Message, the text payload
"""

from dataclasses import dataclass

from ..exceptions import ValidationError


def _require_text(value, label: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValidationError(f"{label} cannot be empty")


@dataclass(frozen=True)
class Topic:
    """Represents a named broker topic"""
    name: str

    def __post_init__(self):
        _require_text(self.name, "Topic name")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Message:
    """Represents a message payload"""
    content: str

    def __post_init__(self):
        _require_text(self.content, "Message content")

    def __str__(self) -> str:
        return self.content
