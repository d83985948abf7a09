import logging

import pytest

from panelctl.errors import UartError
from panelctl.uart import READ_BUFFER_SIZE, Uart


class FakePort:
    def __init__(self, reply=b"ACK", fail=False):
        self.reply = reply
        self.fail = fail
        self.written = []
        self.rx = b""
        self.closed = False

    def write(self, data):
        if self.fail:
            raise OSError("device gone")
        self.written.append(data)
        self.rx += self.reply
        return len(data)

    def flush(self):
        pass

    @property
    def in_waiting(self):
        return len(self.rx)

    def read(self, size=1):
        chunk, self.rx = self.rx[:size], self.rx[size:]
        return chunk

    def close(self):
        self.closed = True


def test_write_sends_bytes_and_returns_reply():
    port = FakePort()
    uart = Uart(port)
    assert uart.write("<ID><01><E>") == "ACK"
    assert port.written == [b"<ID><01><E>"]


def test_nack_is_logged(caplog):
    uart = Uart(FakePort(reply=b"NACK"))
    with caplog.at_level(logging.ERROR, logger="panelctl.uart"):
        assert uart.write("<D*>") == "NACK"
    assert any("positive response" in r.getMessage() for r in caplog.records)


def test_no_reply_raises():
    with pytest.raises(UartError):
        Uart(FakePort(reply=b"")).write("<D*>")


def test_reply_is_bounded():
    uart = Uart(FakePort(reply=b"x" * (READ_BUFFER_SIZE + 8)))
    assert uart.write("<D*>") == "x" * READ_BUFFER_SIZE


def test_invalid_utf8_raises():
    with pytest.raises(UartError, match="UTF-8"):
        Uart(FakePort(reply=b"\xff\xfe")).write("<D*>")


def test_os_error_becomes_uart_error():
    with pytest.raises(UartError) as info:
        Uart(FakePort(fail=True)).write("<D*>")
    assert str(info.value) == "Uart: device gone"


def test_close_and_context_manager():
    port = FakePort()
    with Uart(port) as uart:
        uart.write("<D*>")
    assert port.closed is True


def test_missing_device(tmp_path):
    with pytest.raises(UartError):
        Uart(str(tmp_path / "missing-device"))