"""Entry point for running the IOS-style router CLI simulator interactively."""

from __future__ import annotations

try:  # pragma: no cover - 環境依存
    import readline
except ImportError:  # pragma: no cover - Windows 想定
    readline = None

from ios_sim.cli.dispatcher import RouterCLI
from ios_sim.router_core import DEFAULT_INTERFACES, RouterCore


def _default_router() -> RouterCore:
    return RouterCore(hostname="Router", interfaces=DEFAULT_INTERFACES)


def _setup_readline(cli: RouterCLI) -> None:  # pragma: no cover - 対話設定
    if readline is None:
        return
    try:
        if readline.__doc__ and "libedit" in readline.__doc__:
            readline.parse_and_bind("bind ^I rl_complete")
        else:
            readline.parse_and_bind("tab: complete")
        readline.set_completer(lambda text, state: cli.complete(text, state))
        readline.set_completer_delims(" \t\n")
    except Exception:  # pragma: no cover - libedit 差異
        pass


def _repl(cli: RouterCLI) -> None:
    _setup_readline(cli)
    if cli.router.banner_motd:
        print(cli.router.banner_motd)
    print("Router CLI simulator. Type 'help' for available commands.")
    while not cli.closed:
        try:
            command = input(f"{cli.prompt()} ")
        except EOFError:  # pragma: no cover - 対話支援用ヘルパー
            print()
            break
        except KeyboardInterrupt:
            print()
            continue
        output = cli.execute(command).render()
        if output:
            print(output)


def main() -> None:
    _repl(RouterCLI(_default_router()))


if __name__ == "__main__":  # pragma: no cover - 手動実行用
    main()
