# panelctl

`panelctl` drives an AM03127 LED message panel connected to a serial port.
It keeps the panel's pages and schedules in local JSON files, sends them to
the panel again when it starts, and offers a small HTTP API to change them.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
panelctl /dev/ttyUSB0
```

This opens the serial port (9600 baud, 8 data bits, no parity, 1 stop bit),
sets the panel ID to 1, replays the stored pages and schedules, and then serves
the HTTP API with Flask until stopped. If the port cannot be opened, or the
panel does not answer during start-up, the command exits with status 1.

Options:

| Option          | Default      | Meaning                                        |
|-----------------|--------------|------------------------------------------------|
| `device`        | (required)   | serial device the panel is connected to        |
| `--storage-dir` | `panel-data` | directory holding `pages.json` and `schedules.json` |
| `--host`        | `0.0.0.0`    | address the HTTP server listens on             |
| `--port`        | `80`         | port the HTTP server listens on                |
| `--log-level`   | `INFO`       | `DEBUG`, `INFO`, `WARNING`, `ERROR` or `CRITICAL` |

Run `panelctl --help` for the same list.

## HTTP API

| Method | Path               | Purpose                                   |
|--------|--------------------|-------------------------------------------|
| GET    | `/page/<id>`       | Read a stored page (`A`–`Z`)              |
| POST   | `/page/<id>`       | Set a page (`A`–`Z`) and send it to the panel |
| DELETE | `/page/<id>`       | Delete a page (`A`–`Z`)                   |
| GET    | `/pages`           | List all stored pages                     |
| POST   | `/pages`           | Set up to 32 pages at once (JSON array)   |
| GET    | `/schedule/<id>`   | Read a stored schedule (`A`–`Z` accepted) |
| POST   | `/schedule/<id>`   | Set a schedule (`A`–`E`)                  |
| DELETE | `/schedule/<id>`   | Delete a schedule (`A`–`E`)               |
| GET    | `/schedules`       | List all stored schedules                 |
| POST   | `/schedules`       | Set up to 8 schedules at once (JSON array) |
| POST   | `/clock`           | Set the panel's real-time clock           |
| POST   | `/reset`           | Delete all pages and schedules            |

An invalid ID or an invalid JSON body gives `400`, a missing page or schedule
gives `404`, and a storage or serial failure gives `500`, each with a short
plain-text message. A path segment that is not a single character gives `404`.
Successful requests answer `200` with an empty body, or with JSON for reads.

In `/pages` and `/schedules` posts each item is stored under its own `id`.

### Page

```json
{
  "line": 1,
  "id": "A",
  "leading": "scroll_left",
  "lagging": "hold",
  "waiting_mode_and_speed": "fastest_normal",
  "message": "Hello"
}
```

All fields are required. `leading`, `lagging` and `waiting_mode_and_speed`
take the snake_case values of the `Leading`, `Lagging` and
`WaitingModeAndSpeed` enums in `panelctl.page`. The message may be at most 16
bytes in UTF-8. The umlauts `ä ö ü Ä Ö Ü` and `ß` are sent to the panel as its
own character codes; anything that no longer fits in 16 bytes after that
replacement is dropped.

### Schedule

```json
{
  "id": "A",
  "from": {"year": 25, "month": 1, "day": 1, "hour": 8, "minute": 0},
  "to":   {"year": 25, "month": 12, "day": 31, "hour": 18, "minute": 0},
  "pages": "ABC"
}
```

`pages` may be at most 31 bytes.

### Clock

```json
{"year": 25, "week": 10, "month": 3, "day": 7, "hour": 12, "minute": 30, "second": 0}
```

Every number in a schedule or clock must be between 0 and 255.

## Using it from Python

```python
from panelctl.page import Leading, Page
from panelctl.protocol import DeletePage, set_id

print(set_id(1))                          # <ID><01><E>
print(DeletePage("B").command(1))         # framed command with checksum

page = Page(id="A", message="Hallo", leading=Leading.SCROLL_LEFT)
print(page.command(1))
```

- `panelctl.protocol` holds the command framing (`checksum`, `set_id`,
  `Command.command`) and the `DeleteAll`, `DeletePage`, `DeleteSchedule`,
  `DateTime`, `ScheduleDateTime` and `Schedule` commands.
- `panelctl.page` holds `Page`, its effect enums, and the inline formatting
  helpers `Font`, `Clock` and `ColumnStart`.
- `panelctl.uart.Uart` sends a command and returns the panel's reply; it takes
  a device name or an already open serial-like object.
- `panelctl.storage.StorageSection` stores records under one-character keys in
  a JSON file limited to 12 KiB.
- `panelctl.panel.Panel` combines a `Uart` with a page and a schedule section;
  all its operations are serialised by a lock.
- `panelctl.server.create_app` builds the Flask application around a panel.
- `panelctl.errors` defines `PanelError` and its subclasses, each with the
  HTTP status it maps to.

## What it does not do

There is no web front page: `GET /` is not served, only the API routes above.
The controller does not set up any network connection itself; it listens on
whatever host and port it is given.