"""Per-group enabling and disabling of bot services, stored in SQLite."""

from __future__ import annotations

import logging
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/control/plugins.db"
NOT_FOUND = "没有找到指定服务!"

_TOGGLE_COMMANDS = frozenset(
    {"启用", "enable", "禁用", "disable", "全局启用", "enableall", "全局禁用", "disableall"}
)
_RESET_COMMANDS = frozenset({"还原", "reset"})
_USAGE_COMMANDS = frozenset({"用法", "usage"})
_LIST_COMMANDS = frozenset({"服务列表", "service_list"})


@dataclass(frozen=True)
class Options:
    """Options of a registered service."""

    disable_on_default: bool = False
    help: str = ""


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class _Store:
    """One table per service holding (gid, disable) rows."""

    def __init__(self, path: str) -> None:
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._lock = threading.RLock()

    def create(self, table: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                f"CREATE TABLE IF NOT EXISTS {_quote(table)} "
                "(gid INTEGER PRIMARY KEY, disable INTEGER NOT NULL)"
            )

    def put(self, table: str, gid: int, disable: int) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                f"REPLACE INTO {_quote(table)} (gid, disable) VALUES (?, ?)", (gid, disable)
            )

    def get(self, table: str, gid: int) -> int | None:
        with self._lock:
            row = self._conn.execute(
                f"SELECT disable FROM {_quote(table)} WHERE gid = ?", (gid,)
            ).fetchone()
        return None if row is None else row[0]

    def remove(self, table: str, gid: int) -> None:
        with self._lock, self._conn:
            self._conn.execute(f"DELETE FROM {_quote(table)} WHERE gid = ?", (gid,))

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class Control:
    """Enable state of one service. Group id 0 stands for all groups."""

    def __init__(self, service: str, options: Options | None, store: _Store) -> None:
        self.service = service
        self.options = options or Options()
        self._store = store
        store.create(service)

    def enable(self, group_id: int) -> None:
        self._store.put(self.service, group_id, 0)

    def disable(self, group_id: int) -> None:
        self._store.put(self.service, group_id, 1)

    def reset(self, group_id: int) -> None:
        """Forget the group's own setting; group 0 cannot be reset."""
        if group_id != 0:
            self._store.remove(self.service, group_id)

    def is_enabled_in(self, gid: int) -> bool:
        if gid != 0:
            state = self._store.get(self.service, gid)
            if state is not None:
                logger.debug("[control] plugin %s of grp %d : %d", self.service, gid, state)
                return state == 0
        state = self._store.get(self.service, 0)
        if state is not None:
            logger.debug("[control] plugin %s of all : %d", self.service, state)
            return state == 0
        return not self.options.disable_on_default

    def allows(self, group_id: int, user_id: int) -> bool:
        """Whether an event passes; private chats use the negated user id."""
        return self.is_enabled_in(group_id if group_id != 0 else -user_id)


class ControlRegistry:
    """The set of registered services sharing one database."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH) -> None:
        self._store = _Store(db_path)
        self._managers: dict[str, Control] = {}
        self._lock = threading.RLock()

    def __enter__(self) -> ControlRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._store.close()

    def register(self, service: str, options: Options | None = None) -> Control:
        control = Control(service, options, self._store)
        with self._lock:
            self._managers[service] = control
        return control

    def delete(self, service: str) -> None:
        """Forget a service; its stored settings are kept."""
        with self._lock:
            self._managers.pop(service, None)

    def lookup(self, service: str) -> Control | None:
        with self._lock:
            return self._managers.get(service)

    def items(self) -> list[tuple[str, Control]]:
        with self._lock:
            return list(self._managers.items())

    def usage(self, service: str) -> str:
        control = self.lookup(service)
        if control is None:
            return NOT_FOUND
        return control.options.help or "该服务无帮助!"

    def service_list(self, group_id: int) -> str:
        lines = ["---服务列表---"]
        for i, (name, control) in enumerate(self.items(), start=1):
            mark = "●" if control.is_enabled_in(group_id) else "○"
            lines.append(f"{i}: {mark}{name}")
        return "\n".join(lines)

    def handle_command(self, command: str, args: str, group_id: int, user_id: int) -> str:
        """Run a management command and return the reply text."""
        if command in _LIST_COMMANDS:
            return self.service_list(group_id)
        name = args.strip()
        if command in _USAGE_COMMANDS:
            return self.usage(name)
        if command not in _TOGGLE_COMMANDS and command not in _RESET_COMMANDS:
            raise ValueError(f"unknown command: {command}")
        control = self.lookup(name)
        if control is None:
            return NOT_FOUND
        target = group_id if group_id != 0 else -user_id
        if command in _RESET_COMMANDS:
            control.reset(target)
            return "已还原服务的默认启用状态: " + name
        if "全局" in command or "all" in command:
            target = 0
        if "启用" in command or "enable" in command:
            control.enable(target)
            return "已启用服务: " + name
        control.disable(target)
        return "已禁用服务: " + name