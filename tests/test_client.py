import pytest

from rmfsched.client import NotificationClient
from rmfsched.message import Message


class _RecordingClient(NotificationClient):
    def __init__(self):
        self.uri = None
        self.sent = []
        self.closed = False

    def init(self, endpoint_uri):
        self.uri = endpoint_uri

    def is_connected(self):
        return self.uri is not None and not self.closed

    def publish(self, message):
        self.sent.append(message)

    def shutdown(self):
        self.closed = True


def test_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        NotificationClient()


def test_complete_subclass_lifecycle():
    client = _RecordingClient()
    assert client.is_connected() is False
    client.init("ws://localhost:8000/_internal")
    assert client.uri == "ws://localhost:8000/_internal"
    assert client.is_connected() is True
    message = Message("t", "p", 1)
    client.publish(message)
    assert client.sent == [message]
    client.shutdown()
    assert client.is_connected() is False