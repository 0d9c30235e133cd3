import json

import mdnsquery.cli as cli_module
import mdnsquery.discovery as discovery_module
from mdnsquery.cli import MdnsQueryCli
from mdnsquery.discovery import discover_services
from mdnsquery.entry import ServiceEntry
from mdnsquery.errors import BindError, InterfaceError


def entry(name, port):
    e = ServiceEntry(name)
    e.host = name.split(".")[0] + ".local."
    e.port = port
    e.info_fields = ["txt=1"]
    e.info = "txt=1"
    e.has_txt = True
    return e


def test_discover_services_collects_entries(monkeypatch):
    seen = []

    def fake_query(params):
        seen.append(params)
        params.entries.put(entry("a._signage._tcp.local.", 80))
        params.entries.put(entry("b._signage._tcp.local.", 81))
        return 2

    monkeypatch.setattr(discovery_module, "query", fake_query)
    found = discover_services()

    assert [e.name for e in found] == ["a._signage._tcp.local.", "b._signage._tcp.local."]
    params = seen[0]
    assert params.service == "_signage._tcp"
    assert params.timeout == 0.6
    assert params.want_unicast_response


def test_discover_services_unknown_interface(monkeypatch):
    def fake_query(params):
        raise InterfaceError(f"Unknown network interface {params.interface}")

    monkeypatch.setattr(discovery_module, "query", fake_query)
    assert discover_services("_http._tcp", interface="no-such-interface0") == []


def test_discover_services_keeps_partial_results(monkeypatch):
    def fake_query(params):
        params.entries.put(entry("a._http._tcp.local.", 80))
        raise BindError("failed to bind to any multicast udp port")

    monkeypatch.setattr(discovery_module, "query", fake_query)
    found = discover_services("_http._tcp", timeout=0.1)
    assert [e.name for e in found] == ["a._http._tcp.local."]


def test_cli_writes_report(monkeypatch, tmp_path):
    def fake_query(params):
        params.entries.put(entry("printer._ipp._tcp.local.", 631))
        return 1

    monkeypatch.setattr(cli_module, "query", fake_query)
    report = tmp_path / "report.json"
    cli = MdnsQueryCli(["_ipp._tcp", "-t", "0.1", "--no-ipv6", "-o", str(report)])

    assert cli.status == 0
    assert cli.params.use_ipv6 is False
    assert cli.params.timeout == 0.1
    with open(report) as f:
        data = json.load(f)
    assert data[0]["name"] == "printer._ipp._tcp.local."
    assert data[0]["port"] == 631


def test_cli_reports_failure(monkeypatch):
    def fake_query(params):
        raise BindError("failed to bind to any unicast udp port")

    monkeypatch.setattr(cli_module, "query", fake_query)
    assert MdnsQueryCli(["_http._tcp"]).status == 1
