# test_network_sim.py
"""
Integration smoke test for the ios_sim package.
Walks a full configuration session through every CLI mode and checks the rendered show output.
"""

from ios_sim import CliMode, RouterCLI, RouterCore


def test_router_cli_session():
    print("🧪 Testing ios_sim basic session...")
    router = RouterCore("TestRouter")
    cli = RouterCLI(router)

    # user EXEC での show version
    out = cli.execute("show version").output
    assert "Cisco IOS Software" in out

    # hostname 設定（省略形のみで入力）
    cli.execute("en")
    cli.execute("conf t")
    cli.execute("host RouterX")
    cli.execute("end")
    out = cli.execute("sh run").output
    assert "HOSTNAME ROUTERX" in out.upper(), f"Expected hostname not found in:\n{out}"

    # インターフェース設定
    cli.execute("configure terminal")
    cli.execute("interface GigabitEthernet0/0")
    cli.execute("ip address 192.168.1.1 255.255.255.0")
    cli.execute("no shutdown")
    cli.execute("exit")
    assert cli.mode is CliMode.GLOBAL_CONFIG

    # 静的ルート追加
    cli.execute("ip route 10.0.0.0 255.255.255.0 192.168.1.2")

    # OSPF
    cli.execute("router ospf 1")
    cli.execute("network 192.168.1.0 0.0.0.255 area 0")
    cli.execute("end")
    assert cli.prompt() == "RouterX#"

    out = cli.execute("show ip interface brief").output
    assert "192.168.1.1" in out
    out = cli.execute("show ip route").output
    assert "10.0.0.0/24" in out
    out = cli.execute("show ip ospf neighbor").output
    assert "GigabitEthernet0/0" in out

    # 保存と確認
    cli.execute("copy running-config startup-config")
    out = cli.execute("show startup-config").output
    assert "router ospf 1" in out

    cli.execute("disable")
    cli.execute("exit")
    assert cli.closed

    print("✅ ios_sim test passed!\n")


if __name__ == "__main__":
    test_router_cli_session()
    print("🎉 All router simulator smoke tests passed successfully!")
