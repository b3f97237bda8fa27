"""
Provider reconciliation modules.
"""
from .cloudflare import CloudflareClient
from .digitalocean import DigitalOceanClient

__all__ = [
    'CloudflareClient',
    'DigitalOceanClient',
]
