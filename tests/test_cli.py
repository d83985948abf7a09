from unittest.mock import patch

import pytest
import serial

from panelctl.cli import build_parser, main
from panelctl.page import Page
from panelctl.panel import Panel
from panelctl.uart import Uart


class FakeSerial:
    def __init__(self, reply=b"ACK"):
        self.reply = reply
        self.written = []
        self._buffer = b""
        self.closed = False

    def write(self, data):
        self.written.append(bytes(data))
        self._buffer = self.reply
        return len(data)

    def flush(self):
        pass

    def read(self, size=1):
        out, self._buffer = self._buffer[:size], self._buffer[size:]
        return out

    @property
    def in_waiting(self):
        return len(self._buffer)

    def close(self):
        self.closed = True


def test_parser_defaults():
    args = build_parser().parse_args(["/dev/ttyUSB0"])
    assert args.device == "/dev/ttyUSB0"
    assert args.port == 80
    assert args.host == "0.0.0.0"
    assert args.log_level == "INFO"


def test_parser_custom_values(tmp_path):
    args = build_parser().parse_args(
        ["COM3", "--storage-dir", str(tmp_path), "--host", "127.0.0.1", "--port", "8080"]
    )
    assert args.device == "COM3"
    assert args.storage_dir == str(tmp_path)
    assert args.host == "127.0.0.1"
    assert args.port == 8080


def test_parser_requires_device():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_main_initialises_panel_and_serves(tmp_path):
    fake = FakeSerial()
    with patch("serial.Serial", return_value=fake) as serial_cls, patch(
        "flask.Flask.run"
    ) as run:
        code = main(["/dev/ttyUSB0", "--storage-dir", str(tmp_path), "--port", "8081"])
    assert code == 0
    assert serial_cls.call_args.kwargs["baudrate"] == 9600
    assert fake.written == [b"<ID><01><E>"]
    assert run.call_args.kwargs["port"] == 8081
    assert run.call_args.kwargs["host"] == "0.0.0.0"
    assert fake.closed


def test_main_replays_stored_pages(tmp_path):
    page = Page(id="B", message="Hallo")
    seed = Panel(Uart(FakeSerial()), tmp_path)
    seed.set_page("B", page)

    fake = FakeSerial()
    with patch("serial.Serial", return_value=fake), patch("flask.Flask.run"):
        code = main(["/dev/ttyUSB0", "--storage-dir", str(tmp_path)])
    assert code == 0
    assert fake.written[1] == page.command(1).encode("utf-8")
    assert len(fake.written) == 2


def test_main_reports_unopenable_device(tmp_path, capsys):
    with patch("serial.Serial", side_effect=serial.SerialException("no such port")), patch(
        "flask.Flask.run"
    ) as run:
        code = main(["/dev/missing", "--storage-dir", str(tmp_path)])
    assert code == 1
    assert run.call_count == 0
    assert "/dev/missing" in capsys.readouterr().err


def test_main_fails_when_panel_is_silent(tmp_path):
    fake = FakeSerial(reply=b"")
    with patch("serial.Serial", return_value=fake), patch("flask.Flask.run") as run:
        code = main(["/dev/ttyUSB0", "--storage-dir", str(tmp_path)])
    assert code == 1
    assert run.call_count == 0
    assert fake.closed