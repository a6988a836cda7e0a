import json
import socket
import socketserver
import threading
import time
from collections import defaultdict, deque

import pytest


# Sentinel: accept the request but never answer
HANG = object()


class _BrokerHandler(socketserver.BaseRequestHandler):

    def handle(self):
        broker = self.server.broker
        data = b""
        request = None
        while request is None:
            chunk = self.request.recv(4096)
            if not chunk:
                return
            data += chunk
            try:
                request = json.loads(data.decode("utf-8"))
            except ValueError:
                continue
        broker.requests.append(request)

        reply = broker.reply(request) if callable(broker.reply) else broker.reply
        if reply is HANG:
            # Wait until the client gives up and closes
            self.request.recv(1)
            return

        for part in broker.encode(reply):
            self.request.sendall(part)
            if broker.segment_delay:
                time.sleep(broker.segment_delay)

        if broker.hold_open:
            self.request.recv(1)


class FakeBroker:
    """
    In-process TCP broker for tests.

    `reply` may be a dict or None (sent as JSON), raw bytes, a list of byte
    chunks sent as separate segments, HANG, or a callable taking the decoded
    request and returning any of those.
    """

    HANG = HANG

    def __init__(self):
        self.reply = {"Success": True}
        self.segment_delay = 0.0
        self.hold_open = False
        self.requests: list[dict] = []
        self.server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _BrokerHandler)
        self.server.daemon_threads = True
        self.server.broker = self
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    @property
    def host(self) -> str:
        return self.server.server_address[0]

    @property
    def port(self) -> int:
        return self.server.server_address[1]

    @staticmethod
    def encode(reply) -> list[bytes]:
        if isinstance(reply, list):
            return reply
        if isinstance(reply, bytes):
            return [reply]
        return [json.dumps(reply).encode("utf-8")]

    def start(self):
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()


class QueueBroker:
    """Minimal in-memory broker semantics: publish appends, receive pops"""

    def __init__(self):
        self.queues = defaultdict(deque)
        self.subscribers = defaultdict(set)

    def __call__(self, request: dict):
        topic = request["Topic"]
        match request["Action"]:
            case "Subscribe":
                self.subscribers[topic].add(request["AppId"])
                return {"Success": True, "Message": "Subscribed", "Content": None}
            case "Unsubscribe":
                if request["AppId"] not in self.subscribers[topic]:
                    return {"Success": False, "Message": "Not subscribed", "Content": None}
                self.subscribers[topic].discard(request["AppId"])
                return {"Success": True, "Message": "Unsubscribed", "Content": None}
            case "Publish":
                self.queues[topic].append(request["Content"])
                return {"Success": True, "Message": "Published", "Content": None}
            case "Receive":
                if not self.queues[topic]:
                    return {"Success": False, "Message": "Queue is empty", "Content": None}
                return {"Success": True, "Message": None, "Content": self.queues[topic].popleft()}
        return {"Success": False, "Message": "Unknown action", "Content": None}


@pytest.fixture
def broker():
    fake = FakeBroker()
    fake.start()
    yield fake
    fake.stop()


@pytest.fixture
def closed_port():
    """A localhost port with nothing listening on it"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def queue_broker(broker):
    """A fake broker with in-memory topic queues"""
    broker.reply = QueueBroker()
    return broker
