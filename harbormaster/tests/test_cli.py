import json

import pytest
import yaml
from typer.testing import CliRunner

from harbormaster.cli import app
from harbormaster.commands import CliState
from harbormaster.modules.cloudflare import CloudflareClient

from conftest import droplet

runner = CliRunner()


@pytest.fixture
def cli_do(monkeypatch, do_client):
    monkeypatch.setattr(CliState, "digitalocean", lambda self: do_client)
    return do_client


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_command_groups_exist():
    result = runner.invoke(app, ["node", "--help"])
    assert "create" in result.output
    assert "resize" in result.output

    result = runner.invoke(app, ["dns", "assign", "--help"])
    assert "--sub-domain" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "HarborMaster: 0.1.0" in result.output


def test_examples():
    result = runner.invoke(app, ["--examples"])
    assert "floating-ip assign" in result.output


def test_missing_config_exits_1(tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.json"), "node", "delete", "--name", "web-1"])
    assert result.exit_code == 1
    assert "Unable to open" in result.output


def test_invalid_credentials_exit_1(tmp_path):
    path = tmp_path / "harbormaster.json"
    path.write_text(json.dumps({"digital_ocean": {"api_key": "short"}}))

    result = runner.invoke(app, ["-c", str(path), "floating-ip", "assign", "--ip", "192.0.2.1", "--node", "5"])

    assert result.exit_code == 1
    assert "appears invalid" in result.output


def test_floating_ip_already_assigned(cli_do, fake_http):
    fake_http.on("GET", "floating_ips/192.0.2.1", {"floating_ip": {"droplet": {"id": 5}}})

    result = runner.invoke(app, ["floating-ip", "assign", "--ip", "192.0.2.1", "--node", "5"])

    assert result.exit_code == 0
    assert "already up to date" in result.output
    assert fake_http.mutations == []


def test_conflict_exits_2(cli_do, fake_http):
    fake_http.on("GET", "domains/example.com/records",
                 {"domain_records": [{"id": 1, "type": "CNAME", "name": "www", "data": "x."}]})

    result = runner.invoke(app, ["dns", "assign", "-d", "example.com", "--sd", "www", "--ip", "192.0.2.1"])

    assert result.exit_code == 2
    assert "not implemented" in result.output


def test_dns_assign_with_cloudflare(monkeypatch, fake_http):
    monkeypatch.setattr(CliState, "cloudflare", lambda self: CloudflareClient(fake_http))
    fake_http.on("GET", "dns_records", {"result": [], "result_info": {"total_pages": 1}})
    fake_http.on("POST", "dns_records", {"success": True})

    result = runner.invoke(app, ["dns", "assign", "-d", "example.com", "--sd", "www", "--ip", "192.0.2.1",
                                 "--type", "aaaa", "--provider", "cf"])

    assert result.exit_code == 0, result.output
    assert fake_http.mutations[0].payload["type"] == "AAAA"


def test_node_create_writes_snapshot(cli_do, fake_http, tmp_path):
    fake_http.on("GET", "droplets", [{"droplets": []}, {"droplets": [droplet(id=3, memory=2048)]}])
    fake_http.on("POST", "droplets", {})
    output = tmp_path / "node.yaml"

    result = runner.invoke(app, ["node", "create", "--name", "web-1", "--region", "nyc3", "--size", "2",
                                 "--image", "debian-12-x64", "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert "changes applied" in result.output
    data = yaml.safe_load(output.read_text())
    assert data["droplet"]["id"] == 3
    assert data["droplet"]["capacity_gb"] == 2


def test_node_delete_absent(cli_do, fake_http):
    fake_http.on("GET", "droplets", {"droplets": []})

    result = runner.invoke(app, ["-V", "node", "delete", "--name", "web-1"])

    assert result.exit_code == 0
    assert fake_http.mutations == []


def test_node_resize_writes_final_snapshot(cli_do, fake_http, tmp_path):
    fake_http.on("GET", "droplets", {"droplets": [droplet(id=3, memory=1024)]})
    fake_http.on("POST", "droplets/3/actions", {})
    fake_http.on("GET", "droplets/3", [
        {"droplet": droplet(id=3, memory=1024, status="off")},
        {"droplet": droplet(id=3, memory=4096, status="off")},
        {"droplet": droplet(id=3, memory=4096, status="active", ip="198.51.100.20")},
    ])
    output = tmp_path / "node.json"

    result = runner.invoke(app, ["node", "resize", "--name", "web-1", "--size", "4", "--output", str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text())
    assert data["droplet"]["status"] == "active"
    assert data["droplet"]["capacity_gb"] == 4
    assert data["droplet"]["public_ip"] == "198.51.100.20"
    assert len(fake_http.requests_to("droplets")) == 1
