"""FastAPI dependencies that build provider clients from the config file."""
from functools import lru_cache

from harbormaster.config import HarbormasterConfig, load_config
from harbormaster.modules import CloudflareClient, DigitalOceanClient


@lru_cache
def get_config() -> HarbormasterConfig:
    return load_config()


def get_digitalocean() -> DigitalOceanClient:
    return DigitalOceanClient.from_config(get_config().require_digital_ocean())


def get_cloudflare() -> CloudflareClient:
    return CloudflareClient.from_config(get_config().require_cloudflare())


def get_dns_client_factory():
    """Pick the DNS provider per request; only the chosen one needs credentials."""
    return lambda provider: get_cloudflare() if provider == "cf" else get_digitalocean()
