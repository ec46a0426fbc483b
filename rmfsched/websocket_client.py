"""Notification client that broadcasts messages over a websocket connection."""

from __future__ import annotations

import json
import logging
import threading
from collections import deque
from typing import Any, Callable

import websocket

from .client import NotificationClient
from .message import Message

logger = logging.getLogger(__name__)

GOING_AWAY = 1001


def _default_connector(uri: str, timeout: float = 5.0) -> Any:
    connection = websocket.create_connection(uri, timeout=timeout)
    connection.settimeout(None)
    return connection


def encode_message(message: Message) -> str:
    """Serialise a message to the compact JSON text sent over the socket."""
    body = {
        "type": message.type,
        "payload": message.payload,
        "timestamp": message.timestamp,
        "message_id": message.message_id,
    }
    return json.dumps(body, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class WebsocketClient(NotificationClient):
    """Sends queued messages as JSON text frames, reconnecting when needed.

    The connection state is tracked live: a reader thread notices when the
    peer closes the connection. Messages wait in the queue while disconnected
    and are sent once a reconnection succeeds on the next publish.
    """

    def __init__(self, connector: Callable[[str], Any] | None = None) -> None:
        self._connector = connector if connector is not None else _default_connector
        self._uri = ""
        self._conn: Any = None
        self._reader: threading.Thread | None = None
        self._queue: deque[Message] = deque()
        self._cond = threading.Condition()
        self._wakeup = False
        self._thread: threading.Thread | None = None
        self._connected = False
        self._shutdown = True

    def __enter__(self) -> WebsocketClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._shutdown:
            self.shutdown()

    def init(self, endpoint_uri: str) -> None:
        """Connect to ``endpoint_uri`` and start the background sender."""
        self._uri = endpoint_uri
        with self._cond:
            self._shutdown = False
        self._connect()
        self._thread = threading.Thread(
            target=self._run, name="websocket-notification", daemon=True
        )
        logger.info("starting websocket background runner in processing thread")
        self._thread.start()

    def is_connected(self) -> bool:
        return self._connected

    def publish(self, message: Message) -> None:
        logger.info(
            "websocket notification request raised for message with id: %s",
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
            conn = self._conn
            connected = self._connected
        if conn is not None:
            if connected:
                try:
                    conn.send_close(GOING_AWAY)
                except Exception as exc:
                    logger.info("closing websocket failed: %s", exc)
            try:
                conn.abort()
            except Exception as exc:
                logger.info("stopping websocket failed: %s", exc)
        current = threading.current_thread()
        for thread in (self._thread, self._reader):
            if thread is not None and thread is not current:
                thread.join()
        self._thread = None
        self._reader = None
        self._connected = False

    def _connect(self) -> None:
        try:
            conn = self._connector(self._uri)
        except Exception as exc:
            logger.info("websocket connection request failed: %s", exc)
            self._connected = False
            return
        with self._cond:
            if self._shutdown:
                try:
                    conn.abort()
                except Exception:
                    pass
                return
            self._conn = conn
            self._connected = True
        logger.info("websocket connection is open")
        reader = threading.Thread(
            target=self._read, args=(conn,), name="websocket-reader", daemon=True
        )
        self._reader = reader
        reader.start()

    def _read(self, conn: Any) -> None:
        while getattr(conn, "connected", True):
            try:
                conn.recv()
            except Exception:
                break
        with self._cond:
            if conn is self._conn:
                self._connected = False
        logger.info("websocket connection is closed")

    def _run(self) -> None:
        while True:
            with self._cond:
                if self._shutdown:
                    return
            if not self._connected:
                self._connect()
            self._drain()
            with self._cond:
                self._cond.wait_for(lambda: self._wakeup or self._shutdown)
                self._wakeup = False

    def _drain(self) -> None:
        while True:
            with self._cond:
                if self._shutdown or not self._connected or not self._queue:
                    return
                message = self._queue[0]
                conn = self._conn
            try:
                conn.send(encode_message(message))
            except Exception as exc:
                logger.error("unable to publish websocket message: %s", exc)
                with self._cond:
                    if conn is self._conn:
                        self._connected = False
                return
            logger.info("websocket broadcasted message with id: %s", message.message_id)
            with self._cond:
                self._queue.popleft()