import json

import pytest

from harbormaster.config import CloudflareConfig, HarbormasterConfig, PollSettings, load_config
from harbormaster.errors import ConfigError
from harbormaster.utils import redact_sensitive_data

DO_KEY = "a" * 64


def test_load_json_config(tmp_path):
    path = tmp_path / "harbormaster.json"
    path.write_text(json.dumps({"digital_ocean": {"api_key": DO_KEY}}))

    config = load_config(path)

    assert config.require_digital_ocean().api_key == DO_KEY
    assert config.cloudflare is None


def test_load_yaml_config(tmp_path):
    path = tmp_path / "harbormaster.yaml"
    path.write_text(
        "cloudflare:\n"
        "  api_key: abc123\n"
        "  email: ops@example.com\n"
        "  zone: 023e105f4ecef8ad9ca31a8372d0c353\n"
    )

    config = load_config(path)

    assert config.require_cloudflare().zone == "023e105f4ecef8ad9ca31a8372d0c353"
    with pytest.raises(ConfigError):
        config.require_digital_ocean()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Unable to open"):
        load_config(tmp_path / "nope.json")


def test_short_digital_ocean_key(tmp_path):
    path = tmp_path / "harbormaster.json"
    path.write_text(json.dumps({"digital_ocean": {"api_key": "too-short"}}))

    with pytest.raises(ConfigError, match="appears invalid"):
        load_config(path)


@pytest.mark.parametrize("data", [
    {},
    {"digital_ocean": {}},
    {"cloudflare": {"api_key": "k", "email": "ops@example.com"}},
    {"digital_ocean": {"api_key": 12}},
])
def test_schema_violations(data):
    with pytest.raises(ConfigError):
        HarbormasterConfig.from_dict(data)


def test_cloudflare_email_must_look_like_email():
    with pytest.raises(ConfigError):
        CloudflareConfig(api_key="k", email="not-an-email", zone="z").validate()


def test_redact_sensitive_data():
    headers = {"Authorization": "Bearer x", "X-Auth-Key": "y", "Content-Type": "application/json"}
    assert redact_sensitive_data(headers) == {
        "Authorization": "[REDACTED]",
        "X-Auth-Key": "[REDACTED]",
        "Content-Type": "application/json",
    }


@pytest.mark.parametrize("attempts", [0, -1])
def test_poll_settings_need_at_least_one_status_attempt(attempts):
    with pytest.raises(ConfigError, match="STATUS_POLL_ATTEMPTS"):
        PollSettings(status_attempts=attempts)
