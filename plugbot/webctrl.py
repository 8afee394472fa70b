"""HTTP control panel for the bot: service switches and pending friend/group requests."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from flask import Flask, jsonify, redirect, request

from plugbot.control import ControlRegistry

logger = logging.getLogger(__name__)

LABEL = "plugbot"
HOME_PAGE = "/dist/dist/default.html"
SERVICE_NOT_FOUND = "服务不存在"
FLAG_NOT_FOUND = "flag not found"
HANDLED = "操作成功"

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_CORS_HEADERS = {
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, PUT, DELETE,UPDATE",
    "Access-Control-Allow-Headers": (
        "Authorization, Content-Length, X-CSRF-Token, Token,session, Content-Type"
    ),
    "Access-Control-Expose-Headers": (
        "Content-Length, Access-Control-Allow-Origin, Access-Control-Allow-Headers"
    ),
    "Access-Control-Max-Age": "172800",
    "Access-Control-Allow-Credentials": "true",
}


def request_type_name(request_type: str, sub_type: str) -> str:
    """Human readable name of a friend or group request."""
    if request_type == "friend":
        return "好友添加"
    if sub_type == "add":
        return "加群请求"
    return "群邀请"


@dataclass
class RequestEvent:
    """A friend or group request waiting for a decision."""

    request_type: str
    sub_type: str = ""
    type: str = ""
    comment: str = ""
    group_id: int = 0
    user_id: int = 0
    flag: str = ""
    self_id: int = 0

    def __post_init__(self) -> None:
        if not self.type:
            self.type = request_type_name(self.request_type, self.sub_type)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


Handler = Callable[[RequestEvent, bool, str], None]


@dataclass
class RequestStore:
    """Pending requests keyed by flag; `handler` carries out a decision."""

    handler: Handler | None = None
    _events: dict[str, RequestEvent] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def store(self, event: RequestEvent) -> None:
        with self._lock:
            self._events[event.flag] = event

    def pop(self, flag: str) -> RequestEvent | None:
        with self._lock:
            return self._events.pop(flag, None)

    def all(self) -> list[RequestEvent]:
        with self._lock:
            return list(self._events.values())


class _BadInput(Exception):
    pass


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
    raise _BadInput(f"not a boolean: {value!r}")


def _parse_int(value: object) -> int:
    if isinstance(value, bool):
        raise _BadInput(f"not an integer: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            pass
    raise _BadInput(f"not an integer: {value!r}")


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _field(name: str) -> Any:
    """A request parameter from the form, else from the JSON body."""
    if name in request.form:
        return request.form[name]
    data = _json_body()
    if name in data:
        return data[name]
    raise _BadInput(f"missing parameter: {name}")


def create_app(registry: ControlRegistry, requests: RequestStore) -> Flask:
    """The control panel application working on the given registry and requests."""
    app = Flask(__name__)

    @app.errorhandler(_BadInput)
    def bad_input(error: _BadInput):
        logger.error("[gui] %s", error)
        return jsonify(str(error)), 400

    @app.before_request
    def preflight():
        if request.method == "OPTIONS":
            return jsonify("ok!"), 200
        return None

    @app.after_request
    def cors(response):
        origin = request.headers.get("Origin")
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers.update(_CORS_HEADERS)
        return response

    @app.get("/")
    def home():
        return redirect(HOME_PAGE, code=301)

    @app.get("/get_label")
    def get_label():
        return jsonify(LABEL)

    @app.post("/get_plugins")
    def get_plugins():
        return jsonify(
            [
                {"id": 1, "handle_type": "", "name": name, "enable": control.is_enabled_in(0)}
                for name, control in registry.items()
            ]
        )

    @app.post("/get_plugins_status")
    def get_plugins_status():
        group_id = _parse_int(_field("group_id"))
        return jsonify(
            [
                {"name": name, "enable": control.is_enabled_in(group_id)}
                for name, control in registry.items()
            ]
        )

    @app.post("/get_plugin_status")
    def get_plugin_status():
        group_id = _parse_int(_field("group_id"))
        control = registry.lookup(str(_field("name")))
        if control is None:
            return jsonify(SERVICE_NOT_FOUND), 404
        return jsonify({"enable": control.is_enabled_in(group_id)})

    @app.post("/update_plugin_status")
    def update_plugin_status():
        data = _json_body()
        try:
            group_id = _parse_int(data["group_id"])
            name = str(data["name"])
            enable = _parse_bool(data["enable"])
        except KeyError as error:
            raise _BadInput(f"missing parameter: {error.args[0]}") from None
        control = registry.lookup(name)
        if control is None:
            return jsonify(SERVICE_NOT_FOUND), 404
        if enable:
            control.enable(group_id)
        else:
            control.disable(group_id)
        return jsonify(None)

    @app.post("/update_plugin_all_group_status")
    def update_plugin_all_group_status():
        name = str(_field("name"))
        enable = _parse_bool(_field("enable"))
        control = registry.lookup(name)
        if control is None:
            return jsonify(None), 404
        if enable:
            control.enable(0)
        else:
            control.disable(0)
        return jsonify(None)

    @app.post("/update_all_plugin_status")
    def update_all_plugin_status():
        enable = _parse_bool(_field("enable"))
        for _, control in registry.items():
            if enable:
                control.enable(0)
            else:
                control.disable(0)
        return jsonify(None)

    @app.post("/get_requests")
    def get_requests():
        return jsonify([event.to_dict() for event in requests.all()])

    @app.post("/handle_request")
    def handle_request():
        data = _json_body()
        if "flag" not in data or "approve" not in data:
            raise _BadInput("flag and approve are required")
        approve = _parse_bool(data["approve"])
        reason = str(data.get("reason") or "")
        event = requests.pop(str(data["flag"]))
        if event is None:
            return jsonify(FLAG_NOT_FOUND), 404
        if requests.handler is not None:
            requests.handler(event, approve, reason)
        logger.debug("[gui] handled %s of %d", event.type, event.user_id)
        return jsonify(HANDLED)

    return app