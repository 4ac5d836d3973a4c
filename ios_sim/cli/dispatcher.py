"""Mode-scoped command dispatcher for the IOS-style router CLI."""

from __future__ import annotations

from typing import Dict, Optional

from ios_sim.cli.config_commands import register_global_config, register_interface_config, register_line_config
from ios_sim.cli.context import CliMode, ExecutionContext, SessionState
from ios_sim.cli.exec_commands import register_privileged_exec, register_user_exec
from ios_sim.cli.router_commands import register_ospf_config
from ios_sim.cli.trie import CommandTrie, Handler, Outcome, tokenize
from ios_sim.router_core import RouterCore

__all__ = ["RouterCLI"]

_PROMPT_SUFFIX = {
    CliMode.USER_EXEC: ">",
    CliMode.PRIVILEGED_EXEC: "#",
    CliMode.GLOBAL_CONFIG: "(config)#",
    CliMode.LINE_CONFIG: "(config-line)#",
    CliMode.INTERFACE_CONFIG: "(config-if)#",
    CliMode.OSPF_CONFIG: "(config-router)#",
}

_REGISTRARS = {
    CliMode.USER_EXEC: register_user_exec,
    CliMode.PRIVILEGED_EXEC: register_privileged_exec,
    CliMode.GLOBAL_CONFIG: register_global_config,
    CliMode.LINE_CONFIG: register_line_config,
    CliMode.INTERFACE_CONFIG: register_interface_config,
    CliMode.OSPF_CONFIG: register_ospf_config,
}


class RouterCLI:
    """:class:`RouterCore` 用の CLI 実装。モードごとに 1 つのコマンドツリーを持ちます。"""

    def __init__(self, router: RouterCore) -> None:
        self.router = router
        self._session = SessionState()
        self._completion_matches: list[str] = []
        self._tries: Dict[CliMode, CommandTrie] = {}
        for mode, register in _REGISTRARS.items():
            trie = CommandTrie()
            register(trie)
            trie.register(["help"], "Description of the interactive help system", _help_handler(trie))
            self._tries[mode] = trie

    # ------------------------------------------------------------------
    # 状態参照
    # ------------------------------------------------------------------
    @property
    def mode(self) -> CliMode:
        return self._session.mode

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def closed(self) -> bool:
        return self._session.closed

    @property
    def history(self) -> list[str]:
        return list(self._session.history)

    def trie_for_mode(self, mode: CliMode) -> CommandTrie:
        try:
            return self._tries[mode]
        except KeyError as exc:
            raise RuntimeError(f"invalid CLI mode: {mode}") from exc

    def prompt(self) -> str:
        return f"{self.router.hostname}{_PROMPT_SUFFIX[self._session.mode]}"

    # ------------------------------------------------------------------
    # CLI エントリポイント
    # ------------------------------------------------------------------
    def execute(self, command: str) -> Outcome:
        command = command.strip()
        if command:
            self._session.remember(command)

        trie = self.trie_for_mode(self._session.mode)
        context = ExecutionContext(
            mode=self._session.mode,
            router=self.router,
            session=self._session,
        )
        outcome = trie.run(context, command)
        if outcome.ok and context.requested_mode is not None:
            self._enter(context.requested_mode)
        return outcome

    def _enter(self, mode: CliMode) -> None:
        if mode is not CliMode.INTERFACE_CONFIG:
            self._session.interface = None
        if mode is not CliMode.OSPF_CONFIG:
            self._session.ospf_process_id = None
        self._session.mode = mode

    # ------------------------------------------------------------------
    # 補完
    # ------------------------------------------------------------------
    def complete(self, text: str, state: int) -> Optional[str]:
        if state == 0:
            try:
                import readline  # 遅延インポート
            except ImportError:
                return None
            self._completion_matches = self.completion_candidates(readline.get_line_buffer())
        if state < len(self._completion_matches):
            return self._completion_matches[state]
        return None

    def completion_candidates(self, buffer: str) -> list[str]:
        tokens = tokenize(buffer)
        if not tokens or buffer[-1].isspace():
            tokens.append("")
        prefix_tokens, fragment = tokens[:-1], tokens[-1]
        return self.trie_for_mode(self._session.mode).completions(prefix_tokens, fragment)


def _help_handler(trie: CommandTrie) -> Handler:
    def show_help(context: ExecutionContext, tokens: list[str]) -> str:
        entries = [entry for entry in trie.help_entries() if entry[0] != "help"]
        width = max(len(path) for path, _ in entries)
        heading = "Exec commands:" if context.mode.is_exec else "Configure commands:"
        lines = [heading]
        lines.extend(f"  {path:<{width}}  {text}" for path, text in entries)
        return "\n".join(lines)

    return show_help
