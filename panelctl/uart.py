"""Serial link to the LED panel."""

from __future__ import annotations

import logging
from typing import Any

import serial

from panelctl.errors import UartError

log = logging.getLogger(__name__)

BAUD_RATE = 9600
READ_BUFFER_SIZE = 32
DEFAULT_TIMEOUT = 2.0


class Uart:
    """Sends commands to the panel and reads its short replies.

    ``port`` is either a device name, opened at 9600 baud 8N1, or an
    already open serial-like object.
    """

    def __init__(self, port: Any, *, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        if isinstance(port, str):
            try:
                port = serial.Serial(
                    port,
                    baudrate=BAUD_RATE,
                    bytesize=serial.EIGHTBITS,
                    parity=serial.PARITY_NONE,
                    stopbits=serial.STOPBITS_ONE,
                    timeout=timeout,
                )
            except (serial.SerialException, OSError, ValueError) as exc:
                raise UartError(str(exc)) from exc
        self._port = port

    def write(self, data: str) -> str:
        """Send one command and return the panel's reply."""
        log.debug("Sending %s", data)
        try:
            self._port.write(data.encode("utf-8"))
            self._port.flush()
            first = self._port.read(1)
            if not first:
                raise UartError("No response from panel")
            pending = min(self._port.in_waiting, READ_BUFFER_SIZE - 1)
            rest = self._port.read(pending) if pending else b""
        except OSError as exc:
            raise UartError(str(exc)) from exc
        raw = bytes(first) + bytes(rest)
        log.debug("Receiving %d bytes", len(raw))
        try:
            response = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UartError("Response is not valid UTF-8") from exc
        log.debug("Interpreting response as: %s", response)
        if response.startswith("NACK"):
            log.error("Failed to get positive response from uart")
        return response

    def close(self) -> None:
        """Close the serial port."""
        self._port.close()

    def __enter__(self) -> Uart:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()