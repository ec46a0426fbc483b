"""Example node that periodically publishes test notifications."""

from __future__ import annotations

import argparse
import logging
import time
from typing import Any

from .http_client import HTTPClient
from .manager import NotificationManager
from .websocket_client import WebsocketClient

logger = logging.getLogger("test_notification")

DEFAULT_WEBSOCKET_URI = "ws://localhost:8000/_internal"
DEFAULT_HTTP_URI = "http://localhost:8000/notification/telegram"
MESSAGE_TYPE = "maintenance_log_update"


def run(manager: Any, period: float = 10.0, count: int | None = None) -> list[str]:
    """Every ``period`` seconds log the connections and publish a numbered test message.

    Runs ``count`` times, or forever when ``count`` is None. Returns the ids of
    the published messages.
    """
    ids: list[str] = []
    counter = 0
    while count is None or counter < count:
        time.sleep(period)
        logger.info("Connections:")
        for uri, connected in manager.get_connections().items():
            logger.info(
                "- endpoint_uri: %s, connected: %s", uri, "true" if connected else "false"
            )
        counter += 1
        ids.append(manager.publish(f"test message: {counter}", MESSAGE_TYPE))
    return ids


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Publish test notifications periodically.")
    parser.add_argument("--websocket-uri", default=DEFAULT_WEBSOCKET_URI)
    parser.add_argument("--http-uri", default=DEFAULT_HTTP_URI)
    parser.add_argument("--period", type=float, default=10.0)
    parser.add_argument("--count", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    manager = NotificationManager.get()
    clients = [
        manager.create_client(WebsocketClient, args.websocket_uri),
        manager.create_client(HTTPClient, args.http_uri),
    ]
    logger.info("Starting test notification node")
    try:
        run(manager, args.period, args.count)
    except KeyboardInterrupt:
        pass
    finally:
        for client in clients:
            client.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())