"""Tests for the router state store and its ``show`` renderers."""

import pytest

from ios_sim.router_core import DEFAULT_INTERFACES, EVENT_LOG_LIMIT, RouterCore


def test_default_interfaces_in_order():
    router = RouterCore()
    assert router.interface_names() == list(DEFAULT_INTERFACES)
    assert all(not iface.admin_up for iface in router.interfaces)


def test_router_requires_interfaces():
    with pytest.raises(ValueError):
        RouterCore(interfaces=[])


def test_interface_addressing_validation():
    router = RouterCore()
    with pytest.raises(ValueError):
        router.set_interface_ip("GigabitEthernet0/0", "10.0.0.300", "255.255.255.0")
    with pytest.raises(ValueError):
        router.set_interface_ip("GigabitEthernet0/0", "10.0.0.1", "255.0.255.0")
    with pytest.raises(ValueError):
        router.set_interface_ip("GigabitEthernet0/0", "10.0.0.0", "0.0.0.0")
    with pytest.raises(ValueError):
        router.set_interface_ip("Loopback0", "10.0.0.1", "255.255.255.0")

    router.set_interface_ip("GigabitEthernet0/0", "10.0.0.1", "255.255.255.0")
    with pytest.raises(ValueError, match="overlaps"):
        router.set_interface_ip("Serial0/0/0", "10.0.0.2", "255.255.0.0")


def test_show_ip_route_lists_connected_and_static():
    router = RouterCore()
    router.set_interface_ip("GigabitEthernet0/0", "192.168.1.1", "255.255.255.0")
    assert "<no routes>" in router.show_ip_route()
    router.set_interface_admin_state("GigabitEthernet0/0", True)
    router.add_static_route("10.0.0.0", "255.0.0.0", "192.168.1.254")
    table = router.show_ip_route().splitlines()
    assert table[4:] == [
        "S        10.0.0.0/8 [1/0] via 192.168.1.254",
        "C        192.168.1.0/24 is directly connected, GigabitEthernet0/0",
        "L        192.168.1.1/32 is directly connected, GigabitEthernet0/0",
    ]


def test_static_route_add_and_remove():
    router = RouterCore()
    router.add_static_route("10.1.0.0", "255.255.0.0", "192.0.2.1")
    with pytest.raises(ValueError, match="already exists"):
        router.add_static_route("10.1.0.0", "255.255.0.0", "192.0.2.1")
    assert "ip route 10.1.0.0 255.255.0.0 192.0.2.1" in router.show_running_config()
    router.remove_static_route("10.1.0.0", "255.255.0.0", "192.0.2.1")
    with pytest.raises(ValueError, match="not found"):
        router.remove_static_route("10.1.0.0", "255.255.0.0", "192.0.2.1")
    assert "ip route" not in router.show_running_config()


def test_ospf_lifecycle():
    router = RouterCore()
    router.set_interface_ip("GigabitEthernet0/0", "10.0.12.1", "255.255.255.252")
    router.set_interface_admin_state("GigabitEthernet0/0", True)
    router.enable_ospf(1)
    assert router.ospf_router_id.exploded == "10.0.12.1"
    router.enable_ospf(1)
    with pytest.raises(ValueError):
        router.enable_ospf(2)
    with pytest.raises(ValueError, match="area"):
        router.add_ospf_network("10.0.12.0", "0.0.0.3", "backbone")

    router.add_ospf_network("10.0.12.0", "0.0.0.3", "0")
    neighbors = router.show_ip_ospf_neighbor()
    assert "10.0.12.2" in neighbors and "GigabitEthernet0/0" in neighbors

    router.set_passive_interface("GigabitEthernet0/0")
    assert "<none>" in router.show_ip_ospf_neighbor()

    with pytest.raises(ValueError):
        router.disable_ospf(2)
    router.disable_ospf(1)
    assert not router.ospf_enabled
    assert router.show_ip_ospf_neighbor() == "% OSPF not enabled"
    assert "router ospf" not in router.show_running_config()


def test_running_config_header_counts_body():
    router = RouterCore(hostname="Lab")
    text = router.show_running_config()
    header, _, body = text.partition("\n\n")
    assert header == "Building configuration..."
    first, _, config = body.partition("\n")
    assert first == f"Current configuration : {len(config)} bytes"
    assert config.endswith("end")
    assert "hostname Lab" in config


def test_secrets_are_not_rendered_in_clear_text():
    router = RouterCore()
    router.set_enable_secret("class")
    router.set_console_password("cisco")
    config = router.show_running_config()
    assert "enable secret 5 " in config and "class" not in config
    assert " password cisco" in config
    router.set_password_encryption(True)
    config = router.show_running_config()
    assert "service password-encryption" in config
    assert " password 7 " in config and "cisco" not in config


def test_banner_rendering():
    router = RouterCore()
    router.set_banner_motd("Authorized access only")
    assert "banner motd ^CAuthorized access only^C" in router.show_running_config()
    router.set_banner_motd(None)
    assert "banner motd" not in router.show_running_config()


def test_startup_config_round_trip():
    router = RouterCore()
    assert router.show_startup_config() == "% startup-config is not present"
    router.save_startup_config()
    assert router.startup_config is not None
    assert router.show_startup_config().startswith(f"Using {len(router.startup_config)} bytes")
    router.erase_startup_config()
    assert router.startup_config is None


def test_event_log_is_bounded_and_timestamped():
    router = RouterCore()
    for index in range(EVENT_LOG_LIMIT + 10):
        router.set_interface_description("Serial0/0/0", f"link {index}")
    assert len(router.event_log) == EVENT_LOG_LIMIT
    assert router.event_log[-1].endswith(f"'link {EVENT_LOG_LIMIT + 9}'")

    router.set_service_timestamps(True)
    router.set_hostname("R2")
    stamp, _, message = router.event_log[-1].partition(" ")
    assert len(stamp) == 8 and stamp.count(":") == 2
    assert message == "Hostname set to R2"
    assert "Hostname set to R2" in router.show_logging()


def test_hostname_validation():
    router = RouterCore()
    with pytest.raises(ValueError):
        router.set_hostname("")
    with pytest.raises(ValueError):
        router.set_hostname("1router")
    assert router.hostname == "Router"


def test_traceroute_uses_static_next_hop():
    router = RouterCore()
    router.set_interface_ip("GigabitEthernet0/0", "192.168.1.1", "255.255.255.0")
    router.set_interface_admin_state("GigabitEthernet0/0", True)
    router.add_static_route("10.0.0.0", "255.0.0.0", "192.168.1.254")
    lines = router.traceroute("10.9.9.9").splitlines()
    assert lines[-2].startswith("  1 192.168.1.254")
    assert lines[-1].startswith("  2 10.9.9.9")
    assert "% Unknown host" in router.traceroute("example.com")
