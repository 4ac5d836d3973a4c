"""Router state store and ``show`` renderers for the IOS-style CLI simulator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
import hashlib
from ipaddress import IPv4Address, IPv4Interface, IPv4Network
from typing import Dict, Iterable, Optional

from ios_sim.ospf import OspfNetwork, wildcard_to_network
from ios_sim.static_route import StaticRoute

DEFAULT_INTERFACES = (
    "GigabitEthernet0/0",
    "GigabitEthernet0/0/0",
    "GigabitEthernet0/0/1",
    "Serial0/0/0",
    "Serial0/0/1",
)

EVENT_LOG_LIMIT = 100


def _validate_ipv4(value: str) -> bool:
    """IPv4 アドレス形式を検証します。"""

    try:
        IPv4Address(value)
    except ValueError:
        return False
    return True


def _generate_mac(index: int) -> str:
    """インターフェース番号から安定した疑似 MAC アドレスを生成します。"""

    base = 0x02_00_00_00_00_00
    value = base + index
    octets = [(value >> shift) & 0xFF for shift in range(40, -1, -8)]
    return ":".join(f"{octet:02x}" for octet in octets)


def _obscure(secret: str) -> str:
    return hashlib.sha256(secret.encode()).hexdigest()[:16]


@dataclass
class RouterInterface:
    """ルーターのインターフェース状態を表現します。"""

    name: str
    mac_address: str
    ip_address: Optional[str] = None
    subnet_mask: Optional[str] = None
    admin_up: bool = False
    description: str = ""
    ospf_cost: Optional[int] = None

    def oper_status(self) -> str:
        """運用状態を返します（簡易化のため admin と同一とする）。"""

        return "up" if self.admin_up else "administratively down"

    def network(self) -> Optional[IPv4Network]:
        if not (self.ip_address and self.subnet_mask):
            return None
        return IPv4Interface(f"{self.ip_address}/{self.subnet_mask}").network

    def hardware(self) -> str:
        return "Serial" if self.name.lower().startswith("serial") else "CN Gigabit Ethernet"


@dataclass
class ConsoleLine:
    password: Optional[str] = None
    login: bool = False
    logging_synchronous: bool = False
    exec_timeout: Optional[tuple[int, int]] = None


class RouterCore:
    """教育用の簡易ルーターモデル。"""

    def __init__(
        self,
        hostname: str = "Router",
        interfaces: Iterable[str] = DEFAULT_INTERFACES,
    ) -> None:
        self.hostname = hostname
        self.version = "15.1(4)M4"
        self._interfaces: Dict[str, RouterInterface] = {}
        for index, iface in enumerate(interfaces):
            self._interfaces[iface] = RouterInterface(
                name=iface,
                mac_address=_generate_mac(index),
            )
        if not self._interfaces:
            raise ValueError("router requires at least one interface")
        self.enable_secret: Optional[str] = None
        self.password_encryption: bool = False
        self.service_timestamps_enabled: bool = False
        self.banner_motd: Optional[str] = None
        self.console = ConsoleLine()
        self.static_routes: set[StaticRoute] = set()
        self.ospf_process_id: Optional[int] = None
        self.ospf_router_id: Optional[IPv4Address] = None
        self.ospf_networks: set[OspfNetwork] = set()
        self.ospf_passive: set[str] = set()
        self.startup_config: Optional[str] = None
        self.event_log: list[str] = []

    @property
    def interfaces(self) -> list[RouterInterface]:
        return list(self._interfaces.values())

    def interface_names(self) -> list[str]:
        return list(self._interfaces)

    @property
    def ospf_enabled(self) -> bool:
        return self.ospf_process_id is not None

    # ------------------------------------------------------------------
    # グローバル設定
    # ------------------------------------------------------------------
    def set_hostname(self, hostname: str) -> None:
        if not hostname:
            raise ValueError("hostname must not be empty")
        if not hostname[0].isalpha():
            raise ValueError("hostname must start with a letter")
        self.hostname = hostname
        self._log(f"Hostname set to {hostname}")

    def set_enable_secret(self, secret: str) -> None:
        if not secret:
            raise ValueError("enable secret must not be empty")
        self.enable_secret = secret
        self._log("Enable secret configured")

    def set_password_encryption(self, enabled: bool) -> None:
        self.password_encryption = enabled
        state = "enabled" if enabled else "disabled"
        self._log(f"Service password encryption {state}")

    def set_service_timestamps(self, enabled: bool) -> None:
        self.service_timestamps_enabled = enabled
        state = "enabled" if enabled else "disabled"
        self._log(f"Service timestamps {state}")

    def set_banner_motd(self, message: Optional[str]) -> None:
        self.banner_motd = message
        if message is None:
            self._log("Banner MOTD cleared")
        else:
            self._log("Banner MOTD configured")

    # ------------------------------------------------------------------
    # インターフェース
    # ------------------------------------------------------------------
    def _require_interface(self, interface: str) -> RouterInterface:
        try:
            return self._interfaces[interface]
        except KeyError as exc:
            raise ValueError(f"unknown interface: {interface}") from exc

    def set_interface_ip(self, interface: str, ip: str, mask: str) -> None:
        if not (_validate_ipv4(ip) and _validate_ipv4(mask)):
            raise ValueError("invalid IPv4 address or mask")
        try:
            network = IPv4Interface(f"{ip}/{mask}").network
        except ValueError as exc:
            raise ValueError("invalid subnet mask") from exc
        if network.prefixlen == 0:
            raise ValueError("invalid subnet mask")
        iface = self._require_interface(interface)
        for other in self._interfaces.values():
            if other is iface:
                continue
            other_network = other.network()
            if other_network is not None and other_network.overlaps(network):
                raise ValueError(f"{network.with_prefixlen} overlaps with {other.name}")
        iface.ip_address = ip
        iface.subnet_mask = mask
        self._log(f"{interface} IP configured to {ip} {mask}")

    def clear_interface_ip(self, interface: str) -> None:
        iface = self._require_interface(interface)
        iface.ip_address = None
        iface.subnet_mask = None
        self._log(f"{interface} IP configuration removed")

    def set_interface_admin_state(self, interface: str, up: bool) -> None:
        iface = self._require_interface(interface)
        iface.admin_up = up
        state = "up" if up else "down"
        self._log(f"Interface {interface}, changed state to {state}")

    def set_interface_description(self, interface: str, description: str) -> None:
        iface = self._require_interface(interface)
        iface.description = description
        self._log(f"{interface} description set to '{description}'")

    def set_interface_ospf_cost(self, interface: str, cost: int) -> None:
        if not (1 <= cost <= 65535):
            raise ValueError("OSPF cost must be between 1 and 65535")
        iface = self._require_interface(interface)
        iface.ospf_cost = cost
        self._log(f"{interface} OSPF cost set to {cost}")

    # ------------------------------------------------------------------
    # コンソールライン
    # ------------------------------------------------------------------
    def set_console_password(self, password: str) -> None:
        if not password:
            raise ValueError("password must not be empty")
        self.console.password = password
        self._log("Console password configured")

    def set_console_login(self, enabled: bool) -> None:
        self.console.login = enabled
        self._log("Console login " + ("enabled" if enabled else "disabled"))

    def set_logging_synchronous(self, enabled: bool) -> None:
        self.console.logging_synchronous = enabled
        self._log("Console logging synchronous " + ("enabled" if enabled else "disabled"))

    def set_exec_timeout(self, minutes: int, seconds: int = 0) -> None:
        if minutes < 0 or not (0 <= seconds <= 59):
            raise ValueError("invalid exec-timeout")
        self.console.exec_timeout = (minutes, seconds)
        self._log(f"Console exec-timeout set to {minutes} {seconds}")

    # ------------------------------------------------------------------
    # スタティックルーティング
    # ------------------------------------------------------------------
    def _parse_static_route(self, destination: str, mask: str, next_hop: str) -> StaticRoute:
        if not (_validate_ipv4(destination) and _validate_ipv4(mask) and _validate_ipv4(next_hop)):
            raise ValueError("invalid static route parameters")
        try:
            network = IPv4Network(f"{destination}/{mask}", strict=False)
        except ValueError as exc:
            raise ValueError("invalid static route mask") from exc
        return StaticRoute(network=network, next_hop=IPv4Address(next_hop))

    def add_static_route(self, destination: str, mask: str, next_hop: str) -> None:
        route = self._parse_static_route(destination, mask, next_hop)
        if route in self.static_routes:
            raise ValueError("static route already exists")
        self.static_routes.add(route)
        self._log(f"Static route {route.description()} added")

    def remove_static_route(self, destination: str, mask: str, next_hop: str) -> None:
        route = self._parse_static_route(destination, mask, next_hop)
        if route not in self.static_routes:
            raise ValueError("static route not found")
        self.static_routes.remove(route)
        self._log(f"Static route {route.description()} removed")

    # ------------------------------------------------------------------
    # OSPF
    # ------------------------------------------------------------------
    def enable_ospf(self, process_id: int) -> None:
        if not (1 <= process_id <= 65535):
            raise ValueError("process-id must be between 1 and 65535")
        if self.ospf_process_id is not None and self.ospf_process_id != process_id:
            raise ValueError(f"OSPF process {self.ospf_process_id} is already running")
        if self.ospf_process_id is None:
            self.ospf_process_id = process_id
            if self.ospf_router_id is None:
                self.ospf_router_id = self._auto_router_id()
            self._log(f"OSPF process {process_id} enabled")

    def disable_ospf(self, process_id: int) -> None:
        if self.ospf_process_id != process_id:
            raise ValueError(f"OSPF process {process_id} is not running")
        self.ospf_process_id = None
        self.ospf_router_id = None
        self.ospf_networks.clear()
        self.ospf_passive.clear()
        self._log(f"OSPF process {process_id} removed")

    def set_ospf_router_id(self, router_id: str) -> None:
        if not _validate_ipv4(router_id):
            raise ValueError("invalid router-id")
        self.ospf_router_id = IPv4Address(router_id)
        self._log(f"OSPF router-id set to {router_id}")

    def _parse_ospf_network(self, ip: str, wildcard: str, area: str) -> OspfNetwork:
        if not (_validate_ipv4(ip) and _validate_ipv4(wildcard)):
            raise ValueError("invalid address or wildcard")
        try:
            area_id = int(area)
        except ValueError as exc:
            raise ValueError("area must be numeric") from exc
        if area_id < 0:
            raise ValueError("area must not be negative")
        try:
            network, wildcard_addr = wildcard_to_network(ip, wildcard)
        except ValueError as exc:
            raise ValueError("invalid wildcard mask") from exc
        return OspfNetwork(network=network, wildcard=wildcard_addr, area=area_id)

    def add_ospf_network(self, ip: str, wildcard: str, area: str) -> None:
        entry = self._parse_ospf_network(ip, wildcard, area)
        if entry in self.ospf_networks:
            self._log(f"OSPF network {entry.description()} already configured")
            return
        self.ospf_networks.add(entry)
        self._log(f"OSPF network {entry.description()} added")

    def remove_ospf_network(self, ip: str, wildcard: str, area: str) -> None:
        entry = self._parse_ospf_network(ip, wildcard, area)
        if entry not in self.ospf_networks:
            raise ValueError("OSPF network not found")
        self.ospf_networks.remove(entry)
        self._log(f"OSPF network {entry.description()} removed")

    def set_passive_interface(self, interface: str) -> None:
        self._require_interface(interface)
        self.ospf_passive.add(interface)
        self._log(f"OSPF passive-interface {interface}")

    def _auto_router_id(self) -> IPv4Address:
        candidate_ips = [
            IPv4Address(iface.ip_address)
            for iface in self._interfaces.values()
            if iface.ip_address and _validate_ipv4(iface.ip_address)
        ]
        if candidate_ips:
            return max(candidate_ips)
        return IPv4Address("1.1.1.1")

    def _ospf_interfaces(self) -> list[RouterInterface]:
        """OSPF の network 文に含まれる up 状態のインターフェース。"""

        matched: list[RouterInterface] = []
        for iface in self._interfaces.values():
            if not (iface.admin_up and iface.ip_address):
                continue
            address = IPv4Address(iface.ip_address)
            if any(address in entry.network for entry in self.ospf_networks):
                matched.append(iface)
        return matched

    # ------------------------------------------------------------------
    # 設定の保存
    # ------------------------------------------------------------------
    def save_startup_config(self) -> None:
        self.startup_config = self._render_config()
        self._log("Configuration saved to startup-config")

    def erase_startup_config(self) -> None:
        self.startup_config = None
        self._log("startup-config erased")

    def reload(self) -> str:
        self._log("Reload requested (simulated)")
        return (
            "System configuration has been modified. Reloading the router...\n"
            "Reload complete (simulation only; state preserved)."
        )

    # ------------------------------------------------------------------
    # ICMP ヘルパー
    # ------------------------------------------------------------------
    def _known_networks(self) -> list[IPv4Network]:
        networks: list[IPv4Network] = []
        for iface in self._interfaces.values():
            network = iface.network()
            if iface.admin_up and network is not None:
                networks.append(network)
        networks.extend(route.network for route in self.static_routes)
        return networks

    def _is_ip_reachable(self, target: str) -> bool:
        if not _validate_ipv4(target):
            return False
        address = IPv4Address(target)
        return any(address in network for network in self._known_networks())

    def ping(self, target: str) -> str:
        if not _validate_ipv4(target):
            return f'Translating "{target}"...\n% Unknown host'
        lines = [
            "Type escape sequence to abort.",
            f"Sending 5, 100-byte ICMP Echos to {target}, timeout is 2 seconds:",
        ]
        success = self._is_ip_reachable(target)
        lines.append("!!!!!" if success else ".....")
        if success:
            lines.append("Success rate is 100 percent (5/5), round-trip min/avg/max = 1/1/1 ms")
        else:
            lines.append("Success rate is 0 percent (0/5)")
        self._log(f"Ping to {target} {'succeeded' if success else 'failed'}")
        return "\n".join(lines)

    def traceroute(self, target: str) -> str:
        if not _validate_ipv4(target):
            return f'Translating "{target}"...\n% Unknown host'
        lines = [
            "Type escape sequence to abort.",
            f"Tracing the route to {target}",
            "",
        ]
        address = IPv4Address(target)
        hop = 1
        for route in sorted(self.static_routes, key=lambda r: r.network.prefixlen, reverse=True):
            if address in route.network:
                lines.append(f"  {hop} {route.next_hop.exploded} 1 msec 1 msec 1 msec")
                hop += 1
                break
        if self._is_ip_reachable(target):
            lines.append(f"  {hop} {target} 2 msec 2 msec 2 msec")
        else:
            lines.append(f"  {hop}  *  *  *")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # show 系
    # ------------------------------------------------------------------
    def show_version(self) -> str:
        return (
            f"Cisco IOS Software, Simulator Software, Version {self.version}\n"
            "Technical Support: educational use only\n"
            "\n"
            f"{self.hostname} uptime is simulated\n"
            "System image file is 'flash:ios_sim.bin'\n"
            f"{len(self._interfaces)} interfaces\n"
            f"Configuration register is 0x2102"
        )

    def show_interfaces(self) -> str:
        lines: list[str] = []
        for iface in self._interfaces.values():
            protocol = "up" if iface.admin_up else "down"
            lines.append(f"{iface.name} is {iface.oper_status()}, line protocol is {protocol}")
            lines.append(f"  Hardware is {iface.hardware()}, address is {iface.mac_address}")
            if iface.description:
                lines.append(f"  Description: {iface.description}")
            if iface.ip_address and iface.subnet_mask:
                prefix = IPv4Interface(f"{iface.ip_address}/{iface.subnet_mask}")
                lines.append(f"  Internet address is {prefix.with_prefixlen}")
            lines.append("")
        return "\n".join(lines).rstrip()

    def show_ip_interface_brief(self) -> str:
        rows = ["Interface              IP-Address      OK? Method Status                Protocol"]
        for iface in self._interfaces.values():
            ip = iface.ip_address or "unassigned"
            method = "manual" if iface.ip_address else "unset"
            status = "up" if iface.admin_up else "administratively down"
            protocol = "up" if iface.admin_up else "down"
            rows.append(f"{iface.name:<23}{ip:<16}YES {method:<7}{status:<22}{protocol}")
        return "\n".join(rows)

    def show_ip_route(self) -> str:
        lines = [
            "Codes: L - local, C - connected, S - static, O - OSPF",
            "",
            "Gateway of last resort is not set",
            "",
        ]
        entries: list[tuple[IPv4Network, str]] = []
        for iface in self._interfaces.values():
            network = iface.network()
            if not (iface.admin_up and network is not None):
                continue
            entries.append((network, f"C        {network.with_prefixlen} is directly connected, {iface.name}"))
            local = IPv4Network(f"{iface.ip_address}/32")
            entries.append((local, f"L        {local.with_prefixlen} is directly connected, {iface.name}"))
        for route in self.static_routes:
            entries.append((route.network, f"S        {route.network.with_prefixlen} [1/0] via {route.next_hop}"))
        entries.sort(key=lambda item: (int(item[0].network_address), item[0].prefixlen))
        if not entries:
            lines.append("<no routes>")
        lines.extend(line for _, line in entries)
        return "\n".join(lines)

    def show_ip_protocols(self) -> str:
        if not self.ospf_enabled:
            return "Routing Protocol is not running"
        router_id = self.ospf_router_id or self._auto_router_id()
        lines = [
            f'Routing Protocol is "ospf {self.ospf_process_id}"',
            f"  Router ID {router_id.exploded}",
            "  Routing for Networks:",
        ]
        if self.ospf_networks:
            for entry in sorted(self.ospf_networks, key=lambda e: (int(e.network.network_address), e.area)):
                lines.append(f"    {entry.description()}")
        else:
            lines.append("    <none>")
        if self.ospf_passive:
            lines.append("  Passive Interface(s):")
            lines.extend(f"    {name}" for name in sorted(self.ospf_passive))
        lines.append("  Distance: (default is 110)")
        return "\n".join(lines)

    def show_ip_ospf_neighbor(self) -> str:
        if not self.ospf_enabled:
            return "% OSPF not enabled"
        lines = ["Neighbor ID     Pri   State           Dead Time   Address         Interface"]
        neighbors = 0
        for iface in self._ospf_interfaces():
            if iface.name in self.ospf_passive:
                continue
            network = iface.network()
            own = IPv4Address(iface.ip_address)
            peer = next(host for host in network.hosts() if host != own) if network.num_addresses > 2 else None
            if peer is None:
                continue
            lines.append(
                f"{peer.exploded:<16}1     FULL/DR         00:00:38    {peer.exploded:<16}{iface.name}"
            )
            neighbors += 1
        if not neighbors:
            lines.append("<none>")
        return "\n".join(lines)

    def show_logging(self) -> str:
        lines = [f"Log Buffer ({EVENT_LOG_LIMIT} entries):", ""]
        if not self.event_log:
            lines.append("<no events>")
        lines.extend(self.event_log)
        return "\n".join(lines)

    def show_running_config(self) -> str:
        body = self._render_config()
        return (
            "Building configuration...\n"
            "\n"
            f"Current configuration : {len(body)} bytes\n"
            f"{body}"
        )

    def show_startup_config(self) -> str:
        if self.startup_config is None:
            return "% startup-config is not present"
        return f"Using {len(self.startup_config)} bytes\n{self.startup_config}"

    def _render_config(self) -> str:
        """running-config 本文を生成します。"""

        lines = ["!", f"version {self.version.split('(')[0]}"]
        if self.service_timestamps_enabled:
            lines.append("service timestamps log datetime")
        if self.password_encryption:
            lines.append("service password-encryption")
        lines.extend(["!", f"hostname {self.hostname}", "!"])
        if self.enable_secret:
            lines.append(f"enable secret 5 {_obscure(self.enable_secret)}")
            lines.append("!")
        for iface in self._interfaces.values():
            lines.append(f"interface {iface.name}")
            if iface.description:
                lines.append(f" description {iface.description}")
            if iface.ip_address and iface.subnet_mask:
                lines.append(f" ip address {iface.ip_address} {iface.subnet_mask}")
            else:
                lines.append(" no ip address")
            if iface.ospf_cost is not None:
                lines.append(f" ip ospf cost {iface.ospf_cost}")
            lines.append(" no shutdown" if iface.admin_up else " shutdown")
            lines.append("!")
        if self.ospf_enabled:
            lines.append(f"router ospf {self.ospf_process_id}")
            if self.ospf_router_id:
                lines.append(f" router-id {self.ospf_router_id.exploded}")
            for name in sorted(self.ospf_passive):
                lines.append(f" passive-interface {name}")
            for entry in sorted(self.ospf_networks, key=lambda e: (int(e.network.network_address), e.area)):
                lines.append(f" network {entry.description()}")
            lines.append("!")
        for route in sorted(self.static_routes, key=lambda r: (int(r.network.network_address), r.network.prefixlen)):
            lines.append(route.config_line())
        if self.static_routes:
            lines.append("!")
        if self.banner_motd is not None:
            lines.append(f"banner motd ^C{self.banner_motd}^C")
            lines.append("!")
        lines.append("line con 0")
        if self.console.exec_timeout is not None:
            minutes, seconds = self.console.exec_timeout
            lines.append(f" exec-timeout {minutes} {seconds}")
        if self.console.password:
            if self.password_encryption:
                lines.append(f" password 7 {_obscure(self.console.password)}")
            else:
                lines.append(f" password {self.console.password}")
        if self.console.logging_synchronous:
            lines.append(" logging synchronous")
        if self.console.login:
            lines.append(" login")
        lines.extend(["!", "end"])
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # ログ管理
    # ------------------------------------------------------------------
    def _log(self, message: str) -> None:
        timestamp = ""
        if self.service_timestamps_enabled:
            timestamp = datetime.now(UTC).strftime("%H:%M:%S ")
        self.event_log.append(f"{timestamp}{message}")
        if len(self.event_log) > EVENT_LOG_LIMIT:
            self.event_log = self.event_log[-EVENT_LOG_LIMIT:]
