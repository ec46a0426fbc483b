"""Process-wide registry that fans notifications out to its clients."""

from __future__ import annotations

import threading
from typing import Any, ClassVar, TypeVar

from .client import NotificationClient
from .ids import gen_uuid
from .message import Message

_ClientT = TypeVar("_ClientT", bound=NotificationClient)


class NotificationManager:
    """Holds notification clients keyed by endpoint URI and publishes to all of them."""

    _instance: ClassVar[NotificationManager | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._clients: dict[str, NotificationClient] = {}

    @classmethod
    def get(cls) -> NotificationManager:
        """Return the shared manager, creating it on first use. Thread safe."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def publish(self, payload: str, type: str) -> str:  # noqa: A002
        """Send ``payload`` of category ``type`` to every client; return the message id."""
        message = Message(type=type, payload=payload, message_id=gen_uuid())
        for client in self._clients.values():
            client.publish(message)
        return message.message_id

    def get_connections(self) -> dict[str, bool]:
        """Map each client's endpoint URI to whether it is connected."""
        return {uri: client.is_connected() for uri, client in self._clients.items()}

    def create_client(
        self,
        client_cls: type[_ClientT],
        uri: str,
        *args: Any,
        **kwargs: Any,
    ) -> _ClientT:
        """Build a client of ``client_cls``, initialise it on ``uri`` and register it.

        A client already registered for ``uri`` is kept; the new one is still
        returned. Not thread safe.
        """
        if not (isinstance(client_cls, type) and issubclass(client_cls, NotificationClient)):
            raise TypeError("Notification Client must be derived from NotificationClient")
        client = client_cls(*args, **kwargs)
        client.init(uri)
        self._clients.setdefault(uri, client)
        return client