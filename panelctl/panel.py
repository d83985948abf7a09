"""High-level control of the panel: commands on the wire plus persistence."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from panelctl.page import Page
from panelctl.protocol import DateTime, DeleteAll, DeletePage, DeleteSchedule, Schedule, set_id
from panelctl.storage import PAGE_STORAGE_SIZE, SCHEDULE_STORAGE_SIZE, StorageSection
from panelctl.uart import Uart

log = logging.getLogger(__name__)

DEFAULT_PANEL_ID = 1
MAX_PAGES = 32
MAX_SCHEDULES = 8


class Panel:
    """Drives the panel over a UART and keeps pages and schedules on disk.

    All operations are serialised by an internal lock, so one instance may be
    shared between threads.
    """

    def __init__(self, uart: Uart, storage_dir: str | os.PathLike[str]) -> None:
        directory = Path(storage_dir)
        self._uart = uart
        self._lock = threading.RLock()
        log.info("Creating page storage in %s", directory)
        self._pages: StorageSection[Page] = StorageSection(
            directory / "pages.json", Page, MAX_PAGES, PAGE_STORAGE_SIZE
        )
        log.info("Creating schedule storage in %s", directory)
        self._schedules: StorageSection[Schedule] = StorageSection(
            directory / "schedules.json", Schedule, MAX_SCHEDULES, SCHEDULE_STORAGE_SIZE
        )

    def init(self) -> None:
        """Set the panel ID and replay every stored page and schedule."""
        with self._lock:
            log.info("Initialize panel")
            self._uart.write(set_id(DEFAULT_PANEL_ID))
            log.info("Init pages")
            for page in self._pages.read_all():
                self._uart.write(page.command(DEFAULT_PANEL_ID))
            log.info("Init schedules")
            for schedule in self._schedules.read_all():
                self._uart.write(schedule.command(DEFAULT_PANEL_ID))

    def set_clock(self, date_time: DateTime) -> None:
        """Set the panel's real-time clock."""
        with self._lock:
            log.info("Setting clock")
            self._uart.write(date_time.command(DEFAULT_PANEL_ID))

    def set_page(self, page_id: str, page: Page) -> None:
        """Send a page to the panel and store it under ``page_id``."""
        with self._lock:
            log.info("Setting page %r", page_id)
            log.debug("%r", page)
            self._uart.write(page.command(DEFAULT_PANEL_ID))
            self._pages.write(page_id, page)

    def get_page(self, page_id: str) -> Page | None:
        """Return the stored page, or None."""
        with self._lock:
            log.info("Getting page %r", page_id)
            return self._pages.read(page_id)

    def get_pages(self) -> list[Page]:
        """Return every stored page."""
        with self._lock:
            log.info("Getting pages")
            return self._pages.read_all()

    def delete_page(self, page_id: str) -> None:
        """Delete a page from the panel and from storage."""
        with self._lock:
            log.info("Deleting page %r", page_id)
            self._uart.write(DeletePage(page_id).command(DEFAULT_PANEL_ID))
            self._pages.delete(page_id)

    def set_schedule(self, schedule_id: str, schedule: Schedule) -> None:
        """Send a schedule to the panel and store it under ``schedule_id``."""
        with self._lock:
            log.info("Setting schedule %r", schedule_id)
            log.debug("%r", schedule)
            self._uart.write(schedule.command(DEFAULT_PANEL_ID))
            self._schedules.write(schedule_id, schedule)

    def get_schedule(self, schedule_id: str) -> Schedule | None:
        """Return the stored schedule, or None."""
        with self._lock:
            log.info("Getting schedule %r", schedule_id)
            return self._schedules.read(schedule_id)

    def get_schedules(self) -> list[Schedule]:
        """Return every stored schedule."""
        with self._lock:
            log.info("Getting schedules")
            return self._schedules.read_all()

    def delete_schedule(self, schedule_id: str) -> None:
        """Delete a schedule from the panel and from storage."""
        with self._lock:
            log.info("Deleting schedule %r", schedule_id)
            self._uart.write(DeleteSchedule(schedule_id).command(DEFAULT_PANEL_ID))
            self._schedules.delete(schedule_id)

    def delete_all(self) -> None:
        """Clear the panel and erase all stored pages and schedules."""
        with self._lock:
            log.info("Deleting all")
            self._uart.write(DeleteAll().command(DEFAULT_PANEL_ID))
            self._pages.delete_all()
            self._schedules.delete_all()

    def __enter__(self) -> Panel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._uart.close()