"""Notification message carried to every notification client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Message:
    """One notification: its category, payload, timestamp and assigned id."""

    type: str = ""
    """Type or topic of the message."""

    payload: str = ""
    """The content to deliver."""

    timestamp: int = 0
    """Timestamp of the message."""

    message_id: str = ""
    """Identifier assigned when the message is published."""