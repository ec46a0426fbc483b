"""Notification client that delivers messages as HTTP POST requests."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any
from urllib.parse import urlencode

import requests

from .client import NotificationClient
from .message import Message

logger = logging.getLogger(__name__)

KEYCLOAK_AUTH = "keycloak"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HTTPClient(NotificationClient):
    """Posts each message to an endpoint from a background thread.

    Messages are queued and sent in order. A message that fails is kept and
    retried the next time a message is published. With ``auth="keycloak"`` an
    access token is fetched from ``token_url`` before every request and sent
    as a bearer token.
    """

    def __init__(
        self,
        auth: str = "",
        username: str = "",
        password: str = "",
        client_id: str = "",
        token_url: str = "",
        *,
        session: Any = None,
        timeout: float = 10.0,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._endpoint: str | None = None
        self._queue: deque[Message] = deque()
        self._cond = threading.Condition()
        self._wakeup = False
        self._thread: threading.Thread | None = None
        self._connected = False
        self._shutdown = True
        self._token_url: str | None = None
        self._keycloak_query = ""
        if auth == KEYCLOAK_AUTH:
            self._token_url = token_url
            self._keycloak_query = urlencode(
                [
                    ("username", username),
                    ("password", password),
                    ("client_id", client_id),
                    ("grant_type", "password"),
                ]
            )
            self.request_keycloak_token()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._shutdown:
            self.shutdown()

    def init(self, endpoint_uri: str) -> None:
        """Start the background sender for ``endpoint_uri``."""
        self._endpoint = endpoint_uri
        with self._cond:
            self._shutdown = False
            self._connected = False
        self._thread = threading.Thread(
            target=self._run, name="http-notification", daemon=True
        )
        logger.info("starting mobile notification background runner in processing thread")
        self._thread.start()

    def request_keycloak_token(self) -> str | None:
        """Fetch an access token from the token endpoint; None if unavailable."""
        if self._token_url is None:
            return None
        logger.info("Retrieving access token from keycloak")
        try:
            response = self._session.post(
                self._token_url,
                data=self._keycloak_query,
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=self._timeout,
            )
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("error %s", exc)
            return None
        if isinstance(body, dict) and "access_token" in body:
            return str(body["access_token"])
        return None

    def is_connected(self) -> bool:
        return self._connected

    def publish(self, message: Message) -> None:
        logger.info(
            "mobile notification request raised for message with id: %s",
            message.message_id,
        )
        with self._cond:
            self._queue.append(message)
            self._wakeup = True
            self._cond.notify()

    def shutdown(self) -> None:
        with self._cond:
            self._shutdown = True
            self._cond.notify()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self._connected = False

    def _run(self) -> None:
        while True:
            with self._cond:
                if self._shutdown:
                    return
            self._drain()
            with self._cond:
                self._cond.wait_for(lambda: self._wakeup or self._shutdown)
                self._wakeup = False

    def _drain(self) -> None:
        while True:
            with self._cond:
                if self._shutdown or not self._queue:
                    return
                message = self._queue[0]
            sent = self._send(message)
            self._connected = sent
            if not sent:
                return
            with self._cond:
                self._queue.popleft()

    def _send(self, message: Message) -> bool:
        headers: dict[str, str] = {}
        try:
            if self._token_url is not None:
                token = self.request_keycloak_token()
                if token is not None:
                    headers["Authorization"] = f"Bearer {token}"
            response = self._session.post(
                self._endpoint,
                params={"message": message.payload, "type": message.type},
                headers=headers,
                timeout=self._timeout,
            )
        except Exception as exc:  # the sender thread must survive any failure
            logger.info("HTTP notification error: %s", exc)
            return False
        if response.status_code < 400:
            logger.info("HTTP notification sent for message with id: %s", message.message_id)
            return True
        logger.info("HTTP notification error for message with id: %s", message.message_id)
        return False