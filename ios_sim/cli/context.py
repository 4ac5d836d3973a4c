"""CLI modes and the per-line execution context handed to command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ios_sim.router_core import RouterCore

__all__ = ["CliMode", "ExecutionContext", "SessionState", "HISTORY_LIMIT"]

HISTORY_LIMIT = 20


class CliMode(Enum):
    USER_EXEC = "user_exec"
    PRIVILEGED_EXEC = "priv_exec"
    GLOBAL_CONFIG = "config"
    LINE_CONFIG = "line"
    INTERFACE_CONFIG = "interface"
    OSPF_CONFIG = "router_ospf"

    @property
    def is_exec(self) -> bool:
        return self in (CliMode.USER_EXEC, CliMode.PRIVILEGED_EXEC)


@dataclass
class SessionState:
    """1 セッション分の状態（現在のモード、選択中のインターフェース、OSPF プロセス番号）。"""

    mode: CliMode = CliMode.USER_EXEC
    interface: Optional[str] = None
    ospf_process_id: Optional[int] = None
    closed: bool = False
    history: list[str] = field(default_factory=list)

    def remember(self, command: str) -> None:
        self.history.append(command)
        if len(self.history) > HISTORY_LIMIT:
            self.history = self.history[-HISTORY_LIMIT:]


@dataclass
class ExecutionContext:
    """Handed to every handler; mode changes are requested, not applied directly."""

    mode: CliMode
    router: RouterCore
    session: SessionState
    requested_mode: Optional[CliMode] = None

    def switch_mode(self, mode: CliMode) -> None:
        self.requested_mode = mode

    def close_session(self) -> None:
        self.session.closed = True
