"""
Cloudflare client: DNS records of a single zone.
"""
import logging
from typing import Optional

from harbormaster.config import CloudflareConfig
from harbormaster.models import DnsRecordSnapshot, DnsRecordSpec, Outcome
from harbormaster.modules import reconcile
from harbormaster.modules.http import ProviderClient
from harbormaster.modules.locator import ResourceLocator, TotalPagesPagination

logger = logging.getLogger(__name__)

CF_BASE_URL = "https://api.cloudflare.com/client/v4/zones"


def _matches_subdomain(sub_domain: str):
    # Cloudflare lists fully qualified names, e.g. "www.example.com"
    sub_domain = sub_domain.lower()

    def predicate(item):
        return str(item.get("name", "")).lower() == f"{sub_domain}.{item.get('zone_name', '')}".lower()
    return predicate


class CloudflareClient:
    """Reconciles DNS records inside one Cloudflare zone."""

    def __init__(self, http: ProviderClient, logger: Optional[logging.Logger] = None):
        self.http = http
        self.logger = logger or logging.getLogger(f"{__name__}.CloudflareClient")
        self.locator = ResourceLocator(http, logger=self.logger)

    @classmethod
    def from_config(cls, config: CloudflareConfig, logger: Optional[logging.Logger] = None) -> 'CloudflareClient':
        config.validate()
        http = ProviderClient(
            f"{CF_BASE_URL}/{config.zone}",
            headers={"X-Auth-Email": config.email, "X-Auth-Key": config.api_key},
            logger=logger,
        )
        return cls(http, logger=logger)

    def find_record(self, sub_domain: str) -> Optional[DnsRecordSnapshot]:
        self.logger.info("Getting list of current subdomains")
        found = self.locator.find("dns_records", "result", _matches_subdomain(sub_domain), TotalPagesPagination())
        return DnsRecordSnapshot.from_cloudflare(found) if found else None

    def ensure_record(self, spec: DnsRecordSpec) -> Outcome:
        """Create the record, or update it in place when type or content differ.

        ``spec.domain`` is informational; the zone comes from the config.
        """
        existing = self.find_record(spec.name)
        decision = reconcile.decide_record(existing, spec)
        payload = {"type": spec.record_type, "name": spec.name.lower(), "content": spec.value}

        if isinstance(decision, reconcile.NoOp):
            self.logger.info("SubDomain already exists and is correct")
            return Outcome.NOOP
        if isinstance(decision, reconcile.UpdateNeeded):
            self.logger.info(f"SubDomain already exists, updating ({decision.reason})")
            self.http.put(f"dns_records/{decision.existing_id}", payload)
            return Outcome.CHANGED

        self.logger.info("SubDomain does not exist, creating...")
        self.http.post("dns_records", payload)
        return Outcome.CHANGED

    def delete_record(self, sub_domain: str) -> Outcome:
        existing = self.find_record(sub_domain)
        decision = reconcile.decide_delete(existing.id if existing else None)

        if isinstance(decision, reconcile.NotFound):
            self.logger.info("SubDomain does not exist, nothing to do...")
            return Outcome.NOOP

        self.logger.info(f"Deleting SubDomain {sub_domain.lower()}")
        self.http.delete(f"dns_records/{decision.existing_id}")
        return Outcome.CHANGED
