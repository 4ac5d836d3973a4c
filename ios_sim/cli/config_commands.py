"""Command handlers for the IOS-style router CLI: configuration modes."""

from __future__ import annotations

from typing import Optional

from ios_sim.cli.context import CliMode, ExecutionContext
from ios_sim.cli.parser import parse_banner, parse_int, resolve_interface_name
from ios_sim.cli.trie import CommandTrie

__all__ = ["register_global_config", "register_line_config", "register_interface_config", "register_common_exits"]


def _exit_to_privileged(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.switch_mode(CliMode.PRIVILEGED_EXEC)


def _exit_to_global(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.switch_mode(CliMode.GLOBAL_CONFIG)


def register_common_exits(trie: CommandTrie) -> None:
    """Sub-mode ``exit``/``end``: one level up, or straight back to privileged EXEC."""

    trie.register(["exit"], "Exit from the current configuration mode", _exit_to_global)
    trie.register(["end"], "Exit to privileged EXEC mode", _exit_to_privileged)


# ----------------------------------------------------------------------
# グローバル設定モード
# ----------------------------------------------------------------------
def _hostname(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[1:]
    if len(args) != 1:
        return "Usage: hostname <name>"
    try:
        ctx.router.set_hostname(args[0])
    except ValueError as exc:
        return f"% {exc}"
    return None


def _enable_secret(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[2:]
    if len(args) != 1:
        return "Usage: enable secret <password>"
    try:
        ctx.router.set_enable_secret(args[0])
    except ValueError as exc:
        return f"% {exc}"
    return None


def _service_password_encryption(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_password_encryption(True)


def _no_service_password_encryption(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_password_encryption(False)


def _service_timestamps(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_service_timestamps(True)


def _no_service_timestamps(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_service_timestamps(False)


def _banner_motd(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    message = parse_banner(tokens[2:])
    if message is None:
        return "Usage: banner motd <delimiter><text><delimiter>"
    ctx.router.set_banner_motd(message)
    return None


def _no_banner_motd(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_banner_motd(None)


def _interface(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[1:]
    if not args:
        return "Usage: interface <name>"
    candidate = "".join(args)
    resolved = resolve_interface_name(ctx.router, candidate)
    if resolved is None:
        return f"% Invalid interface: {' '.join(args)}"
    ctx.session.interface = resolved
    ctx.switch_mode(CliMode.INTERFACE_CONFIG)
    return None


def _line_console(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    if len(tokens) != 3:
        return "Usage: line console 0"
    ctx.switch_mode(CliMode.LINE_CONFIG)
    return None


def _router_ospf(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[2:]
    if len(args) != 1:
        return "Usage: router ospf <process-id>"
    process_id = parse_int(args[0])
    if process_id is None:
        return "% Process-id must be numeric"
    try:
        ctx.router.enable_ospf(process_id)
    except ValueError as exc:
        return f"% {exc}"
    ctx.session.ospf_process_id = process_id
    ctx.switch_mode(CliMode.OSPF_CONFIG)
    return None


def _no_router_ospf(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[3:]
    if len(args) != 1:
        return "Usage: no router ospf <process-id>"
    process_id = parse_int(args[0])
    if process_id is None:
        return "% Process-id must be numeric"
    try:
        ctx.router.disable_ospf(process_id)
    except ValueError as exc:
        return f"% {exc}"
    return None


def _ip_route(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[2:]
    if len(args) != 3:
        return "Usage: ip route <destination> <mask> <next-hop>"
    destination, mask, next_hop = args
    try:
        ctx.router.add_static_route(destination, mask, next_hop)
    except ValueError as exc:
        return f"% {exc}"
    return None


def _no_ip_route(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[3:]
    if len(args) != 3:
        return "Usage: no ip route <destination> <mask> <next-hop>"
    destination, mask, next_hop = args
    try:
        ctx.router.remove_static_route(destination, mask, next_hop)
    except ValueError as exc:
        return f"% {exc}"
    return None


def register_global_config(trie: CommandTrie) -> None:
    trie.register(["exit"], "Exit from configure mode", _exit_to_privileged)
    trie.register(["end"], "Exit from configure mode", _exit_to_privileged)
    trie.register(["hostname"], "Set system's network name", _hostname)
    trie.register(["enable", "secret"], "Assign the privileged level secret", _enable_secret)
    trie.register(["service", "password-encryption"], "Encrypt system passwords", _service_password_encryption)
    trie.register(["service", "timestamps"], "Timestamp log messages", _service_timestamps)
    trie.register(["no", "service", "password-encryption"], "Disable password encryption", _no_service_password_encryption)
    trie.register(["no", "service", "timestamps"], "Disable log timestamps", _no_service_timestamps)
    trie.register(["banner", "motd"], "Set Message of the Day banner", _banner_motd)
    trie.register(["no", "banner", "motd"], "Remove the Message of the Day banner", _no_banner_motd)
    trie.register(["interface"], "Select an interface to configure", _interface)
    trie.register(["line", "console", "0"], "Configure the console line", _line_console)
    trie.register(["router", "ospf"], "Open Shortest Path First (OSPF)", _router_ospf)
    trie.register(["no", "router", "ospf"], "Remove an OSPF routing process", _no_router_ospf)
    trie.register(["ip", "route"], "Establish static routes", _ip_route)
    trie.register(["no", "ip", "route"], "Remove a static route", _no_ip_route)


# ----------------------------------------------------------------------
# ライン設定モード
# ----------------------------------------------------------------------
def _password(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[1:]
    if len(args) != 1:
        return "Usage: password <password>"
    try:
        ctx.router.set_console_password(args[0])
    except ValueError as exc:
        return f"% {exc}"
    return None


def _login(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    ctx.router.set_console_login(True)
    if ctx.router.console.password is None:
        return "% Login disabled on line 0, until 'password' is set"
    return None


def _no_login(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_console_login(False)


def _logging_synchronous(ctx: ExecutionContext, tokens: list[str]) -> None:
    ctx.router.set_logging_synchronous(True)


def _exec_timeout(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    args = tokens[1:]
    if len(args) not in (1, 2):
        return "Usage: exec-timeout <minutes> [<seconds>]"
    values = [parse_int(value) for value in args]
    if any(value is None for value in values):
        return "% exec-timeout values must be numeric"
    try:
        ctx.router.set_exec_timeout(*values)
    except ValueError as exc:
        return f"% {exc}"
    return None


def register_line_config(trie: CommandTrie) -> None:
    register_common_exits(trie)
    trie.register(["password"], "Set a password", _password)
    trie.register(["login"], "Enable password checking", _login)
    trie.register(["no", "login"], "Disable password checking", _no_login)
    trie.register(["logging", "synchronous"], "Synchronized message output", _logging_synchronous)
    trie.register(["exec-timeout"], "Set the EXEC timeout", _exec_timeout)


# ----------------------------------------------------------------------
# インターフェース設定モード
# ----------------------------------------------------------------------
def _current_interface(ctx: ExecutionContext) -> Optional[str]:
    return ctx.session.interface


def _description(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    iface = _current_interface(ctx)
    if iface is None:
        return "% No interface selected"
    args = tokens[1:]
    if not args:
        return "Usage: description <text>"
    ctx.router.set_interface_description(iface, " ".join(args))
    return None


def _ip_address(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    iface = _current_interface(ctx)
    if iface is None:
        return "% No interface selected"
    args = tokens[2:]
    if len(args) != 2:
        return "Usage: ip address <address> <mask>"
    ip, mask = args
    try:
        ctx.router.set_interface_ip(iface, ip, mask)
    except ValueError as exc:
        return f"% {exc}"
    return None


def _no_ip_address(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    iface = _current_interface(ctx)
    if iface is None:
        return "% No interface selected"
    ctx.router.clear_interface_ip(iface)
    return None


def _ip_ospf_cost(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    iface = _current_interface(ctx)
    if iface is None:
        return "% No interface selected"
    args = tokens[3:]
    if len(args) != 1:
        return "Usage: ip ospf cost <1-65535>"
    cost = parse_int(args[0])
    if cost is None:
        return "% Cost must be numeric"
    try:
        ctx.router.set_interface_ospf_cost(iface, cost)
    except ValueError as exc:
        return f"% {exc}"
    return None


def _shutdown(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    iface = _current_interface(ctx)
    if iface is None:
        return "% No interface selected"
    ctx.router.set_interface_admin_state(iface, False)
    return f"%LINK-5-CHANGED: Interface {iface}, changed state to administratively down"


def _no_shutdown(ctx: ExecutionContext, tokens: list[str]) -> Optional[str]:
    iface = _current_interface(ctx)
    if iface is None:
        return "% No interface selected"
    ctx.router.set_interface_admin_state(iface, True)
    return f"%LINK-5-CHANGED: Interface {iface}, changed state to up"


def register_interface_config(trie: CommandTrie) -> None:
    register_common_exits(trie)
    trie.register(["description"], "Interface specific description", _description)
    trie.register(["ip", "address"], "Set the IP address of an interface", _ip_address)
    trie.register(["ip", "ospf", "cost"], "Interface cost", _ip_ospf_cost)
    trie.register(["no", "ip", "address"], "Remove the IP address", _no_ip_address)
    trie.register(["shutdown"], "Shutdown the selected interface", _shutdown)
    trie.register(["no", "shutdown"], "Enable the selected interface", _no_shutdown)
