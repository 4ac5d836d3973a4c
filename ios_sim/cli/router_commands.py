"""Command handlers for the IOS-style router CLI: OSPF process mode."""

from __future__ import annotations

from typing import Optional

from ios_sim.cli.config_commands import register_common_exits
from ios_sim.cli.context import ExecutionContext
from ios_sim.cli.parser import resolve_interface_name
from ios_sim.cli.trie import CommandTrie

__all__ = ["register_ospf_config"]


def _ospf_running(ctx: ExecutionContext) -> bool:
    return (
        ctx.session.ospf_process_id is not None
        and ctx.router.ospf_process_id == ctx.session.ospf_process_id
    )


def _router_id(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    if not _ospf_running(ctx):
        return "% OSPF is not enabled"
    args = tokens[1:]
    if len(args) != 1:
        return "Usage: router-id <ip>"
    try:
        ctx.router.set_ospf_router_id(args[0])
    except ValueError as exc:
        return f"% {exc}"
    return None


def _split_network_args(args: list[str]) -> Optional[tuple[str, str, str]]:
    if len(args) != 4 or args[2].lower() != "area":
        return None
    ip_addr, wildcard, _, area = args
    return ip_addr, wildcard, area


def _network(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    if not _ospf_running(ctx):
        return "% OSPF is not enabled"
    parsed = _split_network_args(tokens[1:])
    if parsed is None:
        return "Usage: network <ip> <wildcard> area <id>"
    try:
        ctx.router.add_ospf_network(*parsed)
    except ValueError as exc:
        return f"% {exc}"
    return None


def _no_network(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    if not _ospf_running(ctx):
        return "% OSPF is not enabled"
    parsed = _split_network_args(tokens[2:])
    if parsed is None:
        return "Usage: no network <ip> <wildcard> area <id>"
    try:
        ctx.router.remove_ospf_network(*parsed)
    except ValueError as exc:
        return f"% {exc}"
    return None


def _passive_interface(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    if not _ospf_running(ctx):
        return "% OSPF is not enabled"
    args = tokens[1:]
    if not args:
        return "Usage: passive-interface <name>"
    resolved = resolve_interface_name(ctx.router, "".join(args))
    if resolved is None:
        return f"% Invalid interface: {' '.join(args)}"
    ctx.router.set_passive_interface(resolved)
    return None


def register_ospf_config(trie: CommandTrie) -> None:
    register_common_exits(trie)
    trie.register(["router-id"], "Router-id for this OSPF process", _router_id)
    trie.register(["network"], "Enable routing on an IP network", _network)
    trie.register(["no", "network"], "Disable routing on an IP network", _no_network)
    trie.register(["passive-interface"], "Suppress routing updates on an interface", _passive_interface)
