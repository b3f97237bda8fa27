"""Idempotent reconciliation of droplets, DNS records and floating IPs."""

__version__ = "0.1.0"
