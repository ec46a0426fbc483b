"""Interface that every notification client implements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .message import Message


class NotificationClient(ABC):
    """A channel over which notification messages are delivered."""

    @abstractmethod
    def init(self, endpoint_uri: str) -> None:
        """Start delivering to ``endpoint_uri``."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the endpoint is currently reachable."""

    @abstractmethod
    def publish(self, message: Message) -> None:
        """Queue ``message`` for delivery."""

    @abstractmethod
    def shutdown(self) -> None:
        """Stop delivering and release resources."""