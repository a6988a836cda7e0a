"""
mqclient wire-level connection.

This module implements a single blocking request/response exchange with the broker.
It contains the BrokerConnection class, which owns one TCP socket for one request.

Example usage:
with BrokerConnection.create(("192.0.2.10", 5000)) as conn:
    req = Request(action=Action.RECEIVE, app_id=uuid.uuid4(), topic="orders")
    record = conn.send_request(req)
    if record is None:
        print("Broker sent a null reply")
    else:
        print("Success:", record.success, "Content:", record.content)
"""

import logging
import socket
from typing import Optional, Self, Tuple

from .wire import Request, ResponseRecord, ResponseFramer, WireConst
from ..exceptions import CommunicationError, BrokerTimeoutError, BrokerConnectionError, MalformedResponseError


class BrokerConnection:
    """
    Connect, send one Request, read one reply, close.
      - a new connection is opened for every request, nothing is reused
      - every fault is raised as a CommunicationError chained to its cause
      - the socket is closed on every exit path when used as a context manager
    """

    def __init__(self,
                 server: Tuple[str, int],
                 timeout: Optional[float] = None,
                 max_response_size: int = WireConst.MAX_RESPONSE_SIZE,
                 logger: Optional[logging.Logger] = None):
        self.server = server
        self.timeout = timeout
        self.max_response_size = max_response_size
        self.logger = logger or logging.getLogger(__name__)
        self._sock: Optional[socket.socket] = None

    @classmethod
    def create(cls,
               server: Tuple[str, int],
               timeout: Optional[float] = None,
               max_response_size: int = WireConst.MAX_RESPONSE_SIZE,
               logger: Optional[logging.Logger] = None) -> Self:
        self = cls(server, timeout, max_response_size, logger)
        self.connect()
        return self

    def connect(self):
        if self._sock is not None:
            raise RuntimeError("Connection is already open")
        try:
            if self.timeout is None:
                # Leave the transport's default timeout in place
                self._sock = socket.create_connection(self.server)
            else:
                self._sock = socket.create_connection(self.server, timeout=self.timeout)
        except (OSError, UnicodeError, ValueError) as e:
            raise self._failure("connect", e) from e
        self.logger.debug(f"Connected to broker at {self.server[0]}:{self.server[1]}")

    def send_request(self, req: Request) -> Optional[ResponseRecord]:
        """Send the request and wait for the broker's reply; None means the broker replied null"""
        if self._sock is None:
            raise RuntimeError("Connection is not open")

        try:
            self._sock.sendall(req.to_bytes())
        except OSError as e:
            raise self._failure("send", e) from e

        framer = ResponseFramer(self.max_response_size)
        try:
            while True:
                chunk = self._sock.recv(WireConst.BUFFER_SIZE)
                if not chunk:
                    document = framer.finish()
                    break
                if framer.feed(chunk):
                    document = framer.document
                    break
            return ResponseRecord.from_document(document, raw_rcvd=framer.raw)
        except MalformedResponseError as e:
            self.logger.error(f"Malformed response from {self.server[0]}:{self.server[1]}: {e}")
            raise
        except OSError as e:
            raise self._failure("receive", e) from e

    def _failure(self, stage: str, exc: Exception) -> CommunicationError:
        host, port = self.server
        if isinstance(exc, TimeoutError):
            error = BrokerTimeoutError(f"Timed out during {stage} with broker at {host}:{port}: {exc}")
        else:
            error = BrokerConnectionError(f"Error communicating with broker at {host}:{port} during {stage}: {exc}")
        self.logger.error(str(error))
        return error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def is_connected(self) -> bool:
        """Check if the socket is open"""
        return self._sock is not None

    def close(self):
        """Close the connection"""
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None
                self.logger.debug(f"Closed connection to broker at {self.server[0]}:{self.server[1]}")
