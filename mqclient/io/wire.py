"""
mqclient wire format.

This module implements the JSON documents exchanged with the broker.

Terms:
- Request = A JSON document sent by the Client to the broker
- ResponseRecord = The decoded JSON document the broker sends back
- Framer = Accumulates received bytes until one complete document is present

Request:  {"Action": ..., "AppId": ..., "Topic": ..., "Content": ...}
Response: {"Success": bool, "Message": str|null, "Content": str|null}
  - one document per direction, UTF-8, no length prefix or delimiter
  - Content is only sent with a Publish request
  - field names are case-sensitive
"""

import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Self
from uuid import UUID

from ..exceptions import MalformedResponseError


# Constants
class WireConst:
    """Constants for the wire format"""
    ENCODING = "utf-8"
    BUFFER_SIZE = 4096
    MAX_RESPONSE_SIZE = 1024 * 1024


class Action(Enum):
    """Request actions understood by the broker"""
    SUBSCRIBE = "Subscribe"
    UNSUBSCRIBE = "Unsubscribe"
    PUBLISH = "Publish"
    RECEIVE = "Receive"


@dataclass
class Request:
    """Represents a request to be sent to the broker"""
    action: Action
    app_id: UUID
    topic: str
    content: Optional[str] = None
    raw_sent: Optional[bytes] = None
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if self.action == Action.PUBLISH and self.content is None:
            raise ValueError("Publish requests must carry content")
        if self.action != Action.PUBLISH and self.content is not None:
            raise ValueError(f"{self.action.value} requests cannot carry content")

    def to_document(self) -> dict[str, str]:
        document = {
            "Action": self.action.value,
            "AppId": str(self.app_id),
            "Topic": self.topic,
        }
        if self.action == Action.PUBLISH:
            document["Content"] = self.content
        return document

    def to_bytes(self) -> bytes:
        """Convert request to wire format"""
        wire = json.dumps(self.to_document(), separators=(",", ":")).encode(WireConst.ENCODING)
        self.raw_sent = wire
        return wire


@dataclass
class ResponseRecord:
    """Decoded broker reply, consumed by a single operation"""
    success: bool = False
    message: Optional[str] = None
    content: Optional[str] = None
    raw_rcvd: Optional[bytes] = None

    @classmethod
    def from_document(cls, document: Any, raw_rcvd: Optional[bytes] = None) -> Optional[Self]:
        """Build a record from a parsed JSON document; a null document is an absent reply"""
        if document is None:
            return None
        if not isinstance(document, dict):
            raise MalformedResponseError(f"Expected a JSON object from the broker, got {type(document).__name__}")

        success = document.get("Success", False)
        if not isinstance(success, bool):
            raise MalformedResponseError(f"'Success' must be a boolean, got {success!r}")
        for key in ("Message", "Content"):
            value = document.get(key)
            if value is not None and not isinstance(value, str):
                raise MalformedResponseError(f"'{key}' must be a string or null, got {value!r}")

        return cls(
            success=success,
            message=document.get("Message"),
            content=document.get("Content"),
            raw_rcvd=raw_rcvd,
        )


class ResponseFramer:
    """
    Accumulates reply bytes until they hold one complete JSON document.

    The broker writes a bare document without framing, so completeness is
    detected by decoding the buffer. Bytes after the first document are ignored.
    """

    _decoder = json.JSONDecoder()

    def __init__(self, max_size: int = WireConst.MAX_RESPONSE_SIZE):
        self.max_size = max_size
        self.complete = False
        self.document: Any = None
        self._buffer = bytearray()

    @property
    def raw(self) -> bytes:
        return bytes(self._buffer)

    def feed(self, chunk: bytes) -> bool:
        """Append received bytes; returns True once a complete document is buffered"""
        if self.complete:
            return True
        self._buffer.extend(chunk)
        if len(self._buffer) > self.max_size:
            raise MalformedResponseError(f"Response exceeds {self.max_size} bytes without a complete document")
        text = self._decode_text(final=False)
        if text is None:
            return False
        if not self._may_be_reply(text):
            raise MalformedResponseError(f"Response cannot be a JSON object or null: {text[:32]!r}")
        try:
            self.document, _ = self._decoder.raw_decode(text)
        except json.JSONDecodeError:
            # Possibly incomplete, wait for more
            return False
        self.complete = True
        return True

    def finish(self) -> Any:
        """Called when the peer has closed the connection; returns the parsed document"""
        if self.complete:
            return self.document
        if not self._buffer.strip():
            raise MalformedResponseError("Empty response from broker")
        text = self._decode_text(final=True) or ""
        try:
            self.document, _ = self._decoder.raw_decode(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Invalid JSON from broker: {e}") from e
        self.complete = True
        return self.document

    def _decode_text(self, final: bool) -> Optional[str]:
        try:
            text = self._buffer.decode(WireConst.ENCODING)
        except UnicodeDecodeError as e:
            # A multi-byte character may be split across reads
            if not final and e.reason == "unexpected end of data" and e.end == len(self._buffer):
                return None
            raise MalformedResponseError(f"Response is not valid UTF-8: {e}") from e
        text = text.lstrip()
        return text or None

    @staticmethod
    def _may_be_reply(text: str) -> bool:
        """False when the text can no longer become an object or null"""
        if text.startswith("{"):
            return True
        return "null".startswith(text[:4])
