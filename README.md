# rmfsched

Building blocks for working with a schedule of timed events and for sending
notifications about it.

## Modules

- `rmfsched.identifier`: finds events whose time ranges overlap and groups events
  by type or by values taken from their JSON details.
- `rmfsched.error_code`: `ErrorCode`, a bit-field result code (overall status,
  error type, offending field) with `get(mask)` and a readable `describe(delimiter)`.
- `rmfsched.exceptions`: `SchedulerError` (carries `code` and a printf-style
  formatted message), `IDError` (adds `id`), `CacheInvalidError` and
  `SystemTimeExecutorError`.
- `rmfsched.log`: `LogLevel`, the `LogHandler` interface, `DefaultLogHandler`
  (writes `[LEVEL] file:line: message` lines, to standard error unless given a
  stream), and the functions `register_log_handler`, `unregister_log_handler`,
  `set_log_level` and `log`. The default threshold is `LogLevel.INFO`.
- `rmfsched.time_utils`: nanosecond timestamps (`now`, `time_max`, `to_ns`,
  `to_datetime`), formatting and parsing in a chosen timezone (`to_localtime`,
  `from_localtime`, default format `"%b %d %H:%M:%S %Y"`), and `set_timezone` /
  `get_default_timezone`. An unknown timezone name raises `ValueError`.
- `rmfsched.scheduler_options`: `SchedulerOptions`, a dataclass of scheduler
  settings with their defaults (tick period, past-event allowance, series
  expansion, optimisation window, local caching, charger maps).
- `rmfsched.ids`: `gen_uuid()`, a random version 4 UUID string.
- Notifications: `rmfsched.message.Message`, the `rmfsched.client.NotificationClient`
  interface, the `rmfsched.manager.NotificationManager` singleton, and the
  `rmfsched.http_client.HTTPClient` and `rmfsched.websocket_client.WebsocketClient`
  backends.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Finding conflicts

Events are any objects with `id`, `type`, `start_time`, `duration` and
`event_details` attributes. `event_details` is a JSON string or a mapping.

```python
from rmfsched.identifier import (
    categorise_by_filter,
    categorise_by_type,
    identify_conflicts,
    simple_conflict_check,
)

simple_conflict_check(10, 15, 14, 18)   # True
simple_conflict_check(10, 15, 25, 30)   # False

conflicts = identify_conflicts(events, set(), ["robot", "zone"], "optimal")
for c in conflicts:
    print(c.first, c.second, c.filter, c.filtered_detail)

by_type = categorise_by_type(events)                       # {type: [ids]}
by_detail = categorise_by_filter(events, ["robot", "zone"])  # one {value: [ids]} per filter
```

If you give filters, two overlapping events conflict only when one of the
filtered details is non-empty and equal for both. A filter can reach into nested
details with `::`, for example `"test1::test2::test3"`. If `allowed_types` is
not empty, only events of those types are considered.

There are two methods, `"optimal"` (a sorted lookup) and `"greedy"` (which checks
every pair). Both find the same conflicts. Any other method name raises
`ValueError`.

## Sending notifications

```python
from rmfsched.manager import NotificationManager
from rmfsched.websocket_client import WebsocketClient
from rmfsched.http_client import HTTPClient

manager = NotificationManager.get()
manager.create_client(WebsocketClient, "ws://localhost:8000/_internal")
manager.create_client(HTTPClient, "http://localhost:8000/notification/telegram")

message_id = manager.publish("robot finished", "maintenance_log_update")
print(manager.get_connections())   # {uri: connected, ...}
```

`create_client` builds the client, calls `init(uri)` and registers it under that
URI. If a client is already registered for the URI, the existing one stays
registered and the new client is still returned.

Each backend queues messages and delivers them in order from a background thread.

- `HTTPClient` POSTs each message to the endpoint with `message` and `type` query
  parameters. A status below 400 counts as sent. A failed message stays at the
  head of the queue and is retried the next time a message is published.
- For Keycloak authentication, pass `auth="keycloak"` together with `username`,
  `password`, `client_id` and `token_url`. The client then fetches an access
  token before each request and sends it as a bearer token:

  ```python
  password = "password"
  client = HTTPClient("keycloak", "user", password, "scheduler", "http://localhost:8080/token")
  ```

- `WebsocketClient` sends each message as a compact JSON text frame with the
  fields `type`, `payload`, `timestamp` and `message_id`. It tracks the connection
  live. While disconnected, messages wait in the queue, and the client tries to
  reconnect when the next message is published.

Both clients can be used as context managers, which call `shutdown()` on exit.

## Demo command

```
rmfsched-notify-demo [--websocket-uri URI] [--http-uri URI] [--period SECONDS] [--count N]
```

Every `--period` seconds (default 10), the command logs the connection state of
each endpoint and publishes `test message: <n>` with the type
`maintenance_log_update`. The default endpoints are `ws://localhost:8000/_internal`
and `http://localhost:8000/notification/telegram`. It runs until interrupted, or
for `--count` messages if you give that option.

## What this package does not do

There is no scheduler here. The package does not store or edit a schedule, and
it does not expand recurring series. It keeps no on-disk cache of schedules and
does not execute events at their start time. It does not solve for a
conflict-free timetable either: it only reports conflicts. `SchedulerOptions`,
`CacheInvalidError` and `SystemTimeExecutorError` are provided as data and error
types, but no component in the package uses them.

## Running the tests

```
pytest
```