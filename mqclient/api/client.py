import logging
import time
from typing import Optional
from uuid import UUID

from colorama import Fore, Style

from ..io import BrokerConnection, Action, Request, ResponseRecord
from ..exceptions import ValidationError, CommunicationError, NoMessageAvailable
from .models import Topic, Message

"""
===================================================================================
This module implements the broker operations using mqclient.io.
===================================================================================
"""


class MQClient:
    """
    Client for a message-queue broker.

    Every operation performs one full connect, send, receive, close cycle.
    No connection, session or subscription state is kept between calls,
    so one instance may be shared between threads.
    """

    MAX_PORT = 65535

    def __init__(self,
                 host: str,
                 port: int,
                 app_id: UUID,
                 timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None,
                 print_traffic: bool = False):
        if not isinstance(host, str) or not host.strip():
            raise ValidationError("Broker host cannot be empty")
        if isinstance(port, bool) or not isinstance(port, int):
            raise ValidationError(f"Broker port must be an integer, got {port!r}")
        if not 0 < port <= self.MAX_PORT:
            raise ValidationError(f"Broker port must be between 1 and {self.MAX_PORT}, got {port}")
        if app_id is None:
            raise ValidationError("Application id is required")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ValidationError(f"Timeout must be a positive number, got {timeout!r}")

        self._host = host
        self._port = port
        self._app_id = app_id
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.print_traffic = print_traffic

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def app_id(self) -> UUID:
        return self._app_id

    def __repr__(self) -> str:
        return f"MQClient(host={self._host!r}, port={self._port}, app_id={self._app_id})"

    # ============================
    # OPERATIONS
    # ============================

    def subscribe(self, topic: Topic) -> bool:
        """Subscribe this application to a topic. Returns False if the broker declined."""
        return self._send_for_success(Request(action=Action.SUBSCRIBE, app_id=self._app_id, topic=topic.name))

    def unsubscribe(self, topic: Topic) -> bool:
        """Unsubscribe this application from a topic. Returns False if the broker declined."""
        return self._send_for_success(Request(action=Action.UNSUBSCRIBE, app_id=self._app_id, topic=topic.name))

    def publish(self, message: Message, topic: Topic) -> bool:
        """Publish a message to a topic. Returns False if the broker declined."""
        return self._send_for_success(Request(action=Action.PUBLISH, app_id=self._app_id, topic=topic.name, content=message.content))

    def receive(self, topic: Topic) -> Message:
        """
        Receive the next message on a topic.

        Raises NoMessageAvailable when the broker answered but had nothing to
        deliver, and CommunicationError when the broker could not be reached.
        """
        record = self._send_request(Request(action=Action.RECEIVE, app_id=self._app_id, topic=topic.name))
        if record is not None and record.success and record.content and record.content.strip():
            return Message(record.content)

        broker_message = record.message if record is not None else None
        self.logger.info(f"No message available on topic '{topic.name}'" + (f": {broker_message}" if broker_message else ""))
        raise NoMessageAvailable(f"No message was received from the broker on topic '{topic.name}'", broker_message=broker_message)

    # ============================
    # REQUEST SENDING
    # ============================

    def _send_for_success(self, request: Request) -> bool:
        record = self._send_request(request)
        if record is None or not record.success:
            self.logger.info(f"Broker declined {request.action.value} on topic '{request.topic}'"
                             + (f": {record.message}" if record is not None and record.message else ""))
            return False
        return True

    def _send_request(self, request: Request) -> Optional[ResponseRecord]:
        started = time.monotonic()
        try:
            with BrokerConnection.create((self._host, self._port), timeout=self.timeout, logger=self.logger) as conn:
                record = conn.send_request(request)
        except CommunicationError as e:
            if self.print_traffic:
                print(Fore.MAGENTA + f"REQUEST: {self._raw_str(request.raw_sent)}  "
                      + Fore.RED + f"FAILED: {e}"
                      + Style.RESET_ALL)
            raise

        if self.print_traffic:
            rtt_ms = (time.monotonic() - started) * 1000
            print(Fore.MAGENTA + f"REQUEST: {self._raw_str(request.raw_sent)}  "
                  + Fore.WHITE + Style.DIM + f"RTT: {rtt_ms:.0f}ms".ljust(10)
                  + Style.BRIGHT + Fore.CYAN + f"  RESPONSE: {self._raw_str(record.raw_rcvd) if record else 'null'}"
                  + Style.RESET_ALL)
        return record

    @staticmethod
    def _raw_str(raw: Optional[bytes]) -> str:
        if raw is None:
            return "----"
        return raw.decode("utf-8", errors="replace")
