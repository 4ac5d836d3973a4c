"""Command handlers for the IOS-style router CLI: EXEC modes."""

from __future__ import annotations

from typing import Callable, Optional

from ios_sim.cli.context import CliMode, ExecutionContext
from ios_sim.cli.trie import CommandTrie
from ios_sim.router_core import RouterCore

__all__ = ["register_user_exec", "register_privileged_exec"]


def _enable(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.switch_mode(CliMode.PRIVILEGED_EXEC)


def _disable(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.switch_mode(CliMode.USER_EXEC)


def _logout(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.close_session()


def _configure_terminal(ctx: ExecutionContext, tokens: list[str]) -> str:
    ctx.switch_mode(CliMode.GLOBAL_CONFIG)
    return "Enter configuration commands, one per line.  End with CNTL/Z."


def _ping(ctx: ExecutionContext, tokens: list[str]) -> str:
    args = tokens[1:]
    if len(args) != 1:
        return "Usage: ping <ip-address>"
    return ctx.router.ping(args[0])


def _traceroute(ctx: ExecutionContext, tokens: list[str]) -> str:
    args = tokens[1:]
    if len(args) != 1:
        return "Usage: traceroute <ip-address>"
    return ctx.router.traceroute(args[0])


def _show_history(ctx: ExecutionContext, tokens: list[str]) -> str:
    return "\n".join(f"  {command}" for command in ctx.session.history)


def _copy_run_start(ctx: ExecutionContext, tokens: list[str]) -> str:
    ctx.router.save_startup_config()
    return "Destination filename [startup-config]?\nBuilding configuration...\n[OK]"


def _write_memory(ctx: ExecutionContext, tokens: list[str]) -> str:
    ctx.router.save_startup_config()
    return "Building configuration...\n[OK]"


def _erase_startup(ctx: ExecutionContext, tokens: list[str]) -> str:
    ctx.router.erase_startup_config()
    return "Erasing the nvram filesystem will remove all configuration files!\n[OK]\nErase of nvram: complete"


def _reload(ctx: ExecutionContext, tokens: list[str]) -> str:
    message = ctx.router.reload()
    ctx.switch_mode(CliMode.USER_EXEC)
    return message


def _show(render: Callable[[RouterCore], str]) -> Callable[[ExecutionContext, list[str]], Optional[str]]:
    def handler(ctx: ExecutionContext, tokens: list[str]) -> str:
        return render(ctx.router)

    return handler


def _register_shared(trie: CommandTrie) -> None:
    trie.register(["ping"], "Send echo messages", _ping)
    trie.register(["traceroute"], "Trace route to destination", _traceroute)
    trie.register(["show", "version"], "System hardware and software status", _show(RouterCore.show_version))
    trie.register(["show", "interfaces"], "Interface status and configuration", _show(RouterCore.show_interfaces))
    trie.register(
        ["show", "ip", "interface", "brief"],
        "Brief summary of IP status and configuration",
        _show(RouterCore.show_ip_interface_brief),
    )
    trie.register(["show", "ip", "route"], "IP routing table", _show(RouterCore.show_ip_route))
    trie.register(["show", "history"], "Display the session command history", _show_history)


def register_user_exec(trie: CommandTrie) -> None:
    trie.register(["enable"], "Turn on privileged commands", _enable)
    trie.register(["exit"], "Exit from the EXEC", _logout)
    trie.register(["logout"], "Exit from the EXEC", _logout)
    _register_shared(trie)


def register_privileged_exec(trie: CommandTrie) -> None:
    trie.register(["disable"], "Turn off privileged commands", _disable)
    trie.register(["exit"], "Exit from privileged EXEC", _disable)
    trie.register(["configure", "terminal"], "Configure from the terminal", _configure_terminal)
    _register_shared(trie)
    trie.register(["show", "ip", "protocols"], "IP routing protocol process parameters", _show(RouterCore.show_ip_protocols))
    trie.register(["show", "ip", "ospf", "neighbor"], "OSPF neighbor list", _show(RouterCore.show_ip_ospf_neighbor))
    trie.register(["show", "running-config"], "Current operating configuration", _show(RouterCore.show_running_config))
    trie.register(["show", "startup-config"], "Contents of startup configuration", _show(RouterCore.show_startup_config))
    trie.register(["show", "logging"], "Show the contents of logging buffers", _show(RouterCore.show_logging))
    trie.register(["copy", "running-config", "startup-config"], "Save the running configuration", _copy_run_start)
    trie.register(["write", "memory"], "Write to NV memory", _write_memory)
    trie.register(["erase", "startup-config"], "Erase the startup configuration", _erase_startup)
    trie.register(["reload"], "Simulated restart (running configuration is kept)", _reload)
