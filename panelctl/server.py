"""HTTP interface to the panel: pages, schedules, clock and reset."""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, Response, abort, jsonify, request

from panelctl.errors import BadRequestError, NotFoundError, PanelError
from panelctl.page import Page
from panelctl.panel import MAX_PAGES, MAX_SCHEDULES, Panel
from panelctl.protocol import DateTime, Schedule

log = logging.getLogger(__name__)


def is_page_id_valid(page_id: str) -> bool:
    """True for page IDs 'A' to 'Z'."""
    return isinstance(page_id, str) and len(page_id) == 1 and "A" <= page_id <= "Z"


def is_schedule_id_valid(schedule_id: str) -> bool:
    """True for schedule IDs 'A' to 'E'."""
    return (
        isinstance(schedule_id, str)
        and len(schedule_id) == 1
        and "A" <= schedule_id <= "E"
    )


def _single_char(segment: str) -> str:
    # A path segment that is not exactly one character matches no route.
    if len(segment) != 1:
        abort(404)
    return segment


def _json_body() -> Any:
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise BadRequestError("Invalid JSON body")
    return data


def _parse(kind: Any, data: Any) -> Any:
    try:
        return kind.from_dict(data)
    except (ValueError, TypeError) as exc:
        raise BadRequestError(str(exc)) from exc


def _parse_list(kind: Any, limit: int) -> list[Any]:
    data = _json_body()
    if not isinstance(data, list):
        raise BadRequestError("Expected a JSON array")
    if len(data) > limit:
        raise BadRequestError(f"At most {limit} items are accepted")
    return [_parse(kind, item) for item in data]


def _ok() -> tuple[str, int]:
    return "", 200


def create_app(panel: Panel) -> Flask:
    """Build the web application that serves ``panel``."""
    app = Flask(__name__)

    @app.before_request
    def _log_request() -> None:
        log.info("%s request to %s", request.method, request.path)

    @app.after_request
    def _log_response(response: Response) -> Response:
        status = response.status_code
        if 200 <= status < 300:
            log.info("Returning success %s!", response.status)
        elif 400 <= status < 500:
            log.warning("Returning client error %s!", response.status)
        elif status >= 500:
            log.error("Returning server error %s!", response.status)
        return response

    @app.errorhandler(PanelError)
    def _handle_panel_error(error: PanelError) -> Response:
        if error.status_code >= 500:
            log.error("%s", error)
        return Response(error.message, status=error.status_code, mimetype="text/plain")

    @app.post("/clock")
    def set_clock() -> tuple[str, int]:
        date_time = _parse(DateTime, _json_body())
        log.info("Set clock")
        panel.set_clock(date_time)
        return _ok()

    @app.get("/page/<page_id>")
    def get_page(page_id: str) -> Any:
        page_id = _single_char(page_id)
        log.info("Getting page %r", page_id)
        if not is_page_id_valid(page_id):
            raise BadRequestError("Page ID not valid")
        page = panel.get_page(page_id)
        if page is None:
            raise NotFoundError("Page not found")
        return jsonify(page.to_dict())

    @app.post("/page/<page_id>")
    def set_page(page_id: str) -> tuple[str, int]:
        page_id = _single_char(page_id)
        page = _parse(Page, _json_body())
        log.info("Setting page %r", page_id)
        if not is_page_id_valid(page_id):
            raise BadRequestError("Page ID not valid")
        log.debug("%r", page)
        panel.set_page(page_id, page)
        return _ok()

    @app.delete("/page/<page_id>")
    def delete_page(page_id: str) -> tuple[str, int]:
        page_id = _single_char(page_id)
        if not is_page_id_valid(page_id):
            raise BadRequestError("Page ID not valid")
        log.info("Delete page %r", page_id)
        panel.delete_page(page_id)
        return _ok()

    @app.get("/pages")
    def get_pages() -> Any:
        return jsonify([page.to_dict() for page in panel.get_pages()])

    @app.post("/pages")
    def set_pages() -> tuple[str, int]:
        for page in _parse_list(Page, MAX_PAGES):
            panel.set_page(page.id, page)
        return _ok()

    @app.get("/schedule/<schedule_id>")
    def get_schedule(schedule_id: str) -> Any:
        schedule_id = _single_char(schedule_id)
        log.info("Getting schedule %r", schedule_id)
        # Reading accepts the wider page-ID range.
        if not is_page_id_valid(schedule_id):
            raise BadRequestError("Schedule ID not valid")
        schedule = panel.get_schedule(schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule not found")
        return jsonify(schedule.to_dict())

    @app.post("/schedule/<schedule_id>")
    def set_schedule(schedule_id: str) -> tuple[str, int]:
        schedule_id = _single_char(schedule_id)
        schedule = _parse(Schedule, _json_body())
        log.info("Setting schedule %r", schedule_id)
        if not is_schedule_id_valid(schedule_id):
            raise BadRequestError("Schedule ID not valid")
        panel.set_schedule(schedule_id, schedule)
        return _ok()

    @app.delete("/schedule/<schedule_id>")
    def delete_schedule(schedule_id: str) -> tuple[str, int]:
        schedule_id = _single_char(schedule_id)
        log.info("Deleting schedule %r", schedule_id)
        if not is_schedule_id_valid(schedule_id):
            raise BadRequestError("Schedule ID not valid")
        panel.delete_schedule(schedule_id)
        return _ok()

    @app.get("/schedules")
    def get_schedules() -> Any:
        return jsonify([schedule.to_dict() for schedule in panel.get_schedules()])

    @app.post("/schedules")
    def set_schedules() -> tuple[str, int]:
        for schedule in _parse_list(Schedule, MAX_SCHEDULES):
            panel.set_schedule(schedule.id, schedule)
        return _ok()

    @app.post("/reset")
    def reset() -> tuple[str, int]:
        panel.delete_all()
        return _ok()

    return app