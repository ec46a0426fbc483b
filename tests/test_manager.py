import uuid

import pytest

from rmfsched.client import NotificationClient
from rmfsched.manager import NotificationManager


class _FakeClient(NotificationClient):
    def __init__(self, connected=True, label=""):
        self.connected = connected
        self.label = label
        self.uri = None
        self.sent = []

    def init(self, endpoint_uri):
        self.uri = endpoint_uri

    def is_connected(self):
        return self.connected

    def publish(self, message):
        self.sent.append(message)

    def shutdown(self):
        self.connected = False


def test_get_returns_singleton():
    uri = "ws://localhost:8000/singleton-check"
    client = NotificationManager.get().create_client(_FakeClient, uri, False)
    connections = NotificationManager.get().get_connections()
    assert connections[uri] == client.connected
    message_id = NotificationManager.get().publish("shared", "singleton")
    assert [m.message_id for m in client.sent] == [message_id]
    assert client.sent[0].payload == "shared"


def test_create_client_initialises_and_forwards_arguments():
    manager = NotificationManager()
    client = manager.create_client(_FakeClient, "http://localhost:8000/x", False, label="lbl")
    assert client.uri == "http://localhost:8000/x"
    assert client.connected is False
    assert client.label == "lbl"
    assert manager.get_connections() == {"http://localhost:8000/x": False}


def test_create_client_rejects_non_client_class():
    manager = NotificationManager()
    with pytest.raises(TypeError):
        manager.create_client(dict, "ws://localhost")
    with pytest.raises(TypeError):
        manager.create_client(_FakeClient(), "ws://localhost")


def test_publish_reaches_every_client_with_same_id():
    manager = NotificationManager()
    ws = manager.create_client(_FakeClient, "ws://localhost:8000/_internal")
    http = manager.create_client(_FakeClient, "http://localhost:8000/notification/telegram", False)
    message_id = manager.publish("test message: 1", "maintenance_log_update")
    assert str(uuid.UUID(message_id)) == message_id
    for client in (ws, http):
        assert len(client.sent) == 1
        sent = client.sent[0]
        assert sent.message_id == message_id
        assert sent.payload == "test message: 1"
        assert sent.type == "maintenance_log_update"
    assert manager.get_connections() == {
        "ws://localhost:8000/_internal": True,
        "http://localhost:8000/notification/telegram": False,
    }


def test_publish_ids_are_unique():
    manager = NotificationManager()
    ids = {manager.publish("p", "t") for _ in range(20)}
    assert len(ids) == 20


def test_duplicate_uri_keeps_first_client():
    manager = NotificationManager()
    first = manager.create_client(_FakeClient, "ws://localhost", True)
    second = manager.create_client(_FakeClient, "ws://localhost", False)
    assert second.uri == "ws://localhost"
    assert manager.get_connections() == {"ws://localhost": True}
    manager.publish("p", "t")
    assert len(first.sent) == 1
    assert second.sent == []


def test_no_clients_gives_empty_connections():
    manager = NotificationManager()
    assert manager.get_connections() == {}
    assert len(manager.publish("p", "t")) == len(str(uuid.uuid4()))