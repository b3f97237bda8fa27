"""
Digital Ocean client: droplets, domain records and floating IPs.
"""
import logging
import time
from typing import Any, Dict, Optional

from harbormaster.config import DigitalOceanConfig, PollSettings
from harbormaster.errors import ConflictError, DecodeError, NotFoundError
from harbormaster.models import (
    DnsRecordSnapshot,
    DnsRecordSpec,
    FloatingIpSpec,
    NodeResult,
    NodeSnapshot,
    NodeSpec,
    Outcome,
    size_slug,
)
from harbormaster.modules import reconcile
from harbormaster.modules.http import ProviderClient
from harbormaster.modules.locator import NextLinkPagination, ResourceLocator, ShortPagePagination, name_equals
from harbormaster.modules.polling import Sleep
from harbormaster.modules.resize import NodeResizer

logger = logging.getLogger(__name__)

DO_BASE_URL = "https://api.digitalocean.com/v2/"
DROPLETS_PER_PAGE = 10


class DigitalOceanClient:
    """Reconciles droplets, domain records and floating IPs on Digital Ocean."""

    def __init__(self, http: ProviderClient, settings: Optional[PollSettings] = None,
                 sleep: Sleep = time.sleep, logger: Optional[logging.Logger] = None):
        """
        Args:
            http: Client already carrying the bearer token
            settings: Poll timing (defaults from Config)
            sleep: Sleep function used by every wait, replaced in tests
            logger: Where progress messages go
        """
        self.http = http
        self.settings = settings or PollSettings()
        self.sleep = sleep
        self.logger = logger or logging.getLogger(f"{__name__}.DigitalOceanClient")
        self.locator = ResourceLocator(http, logger=self.logger)

    @classmethod
    def from_config(cls, config: DigitalOceanConfig, **kwargs) -> 'DigitalOceanClient':
        config.validate()
        http = ProviderClient(
            DO_BASE_URL,
            headers={"Authorization": f"Bearer {config.api_key}"},
            logger=kwargs.get('logger'),
        )
        return cls(http, **kwargs)

    # ----- lookups -----

    def find_droplet(self, name: str) -> Optional[NodeSnapshot]:
        """Find a droplet by name (case-insensitive), or None."""
        found = self.locator.find(
            "droplets",
            "droplets",
            name_equals(name),
            ShortPagePagination(DROPLETS_PER_PAGE),
        )
        return NodeSnapshot.from_api(found) if found else None

    def get_droplet(self, droplet_id: int) -> NodeSnapshot:
        body = self.http.get(f"droplets/{droplet_id}")
        found = body.get("droplet")
        if not isinstance(found, dict):
            raise DecodeError(f"Expected a 'droplet' object for droplet {droplet_id}")
        return NodeSnapshot.from_api(found)

    def find_domain_record(self, domain: str, name: str) -> Optional[DnsRecordSnapshot]:
        """Find a record of domain by subdomain name (case-insensitive), or None."""
        self.logger.info("Getting list of current subdomains")
        found = self.locator.find(
            f"domains/{domain.lower()}/records",
            "domain_records",
            name_equals(name),
            NextLinkPagination(),
        )
        return DnsRecordSnapshot.from_digitalocean(found) if found else None

    def get_floating_ip(self, ip: str) -> Optional[int]:
        """Id of the droplet the floating IP is bound to, or None if unassigned."""
        body = self.http.get(f"floating_ips/{ip}")
        droplet = (body.get("floating_ip") or {}).get("droplet") or {}
        return droplet.get("id")

    # ----- mutations -----

    def droplet_action(self, droplet_id: int, action_type: str, **extra: Any) -> Dict[str, Any]:
        payload = {"type": action_type, **extra}
        return self.http.post(f"droplets/{droplet_id}/actions", payload)

    def assign_floating_ip(self, ip: str, droplet_id: int) -> None:
        self.http.post(f"floating_ips/{ip}/actions", {"type": "assign", "droplet_id": droplet_id})

    def _create_droplet(self, spec: NodeSpec) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": spec.name,
            "region": spec.region,
            "size": size_slug(spec.capacity_gb),
            "image": spec.image,
        }
        if spec.ssh_key:
            payload["ssh_keys"] = [spec.ssh_key]
        if spec.tag:
            payload["tags"] = [spec.tag]
        return self.http.post("droplets", payload)

    # ----- reconcile operations -----

    def ensure_node(self, spec: NodeSpec) -> NodeResult:
        """Create the droplet unless one with the same name already exists."""
        existing = self.find_droplet(spec.name)
        decision = reconcile.decide_node(existing, spec)

        if isinstance(decision, reconcile.NoOp):
            self.logger.info("Node by that name already exists")
            return NodeResult(snapshot=existing, changed=False)

        self.logger.info("Node does not exist, creating...")
        body = self._create_droplet(spec)

        # give the provider a moment to assign an ip address
        self.sleep(self.settings.create_settle_delay)
        snapshot = self.find_droplet(spec.name)
        if snapshot is None and body.get("droplet"):
            snapshot = NodeSnapshot.from_api(body["droplet"])
        if snapshot is None:
            raise NotFoundError(f"Node '{spec.name}' was created but is not listed yet")

        self.logger.info("New node created successfully")
        return NodeResult(snapshot=snapshot, changed=True)

    def delete_node(self, name: str) -> Outcome:
        droplet = self.find_droplet(name)
        decision = reconcile.decide_delete(droplet.id if droplet else None)

        if isinstance(decision, reconcile.NotFound):
            self.logger.info("Droplet does not exist, nothing to do...")
            return Outcome.NOOP

        self.logger.warning(f"Deleting node: {name}")
        self.http.delete(f"droplets/{decision.existing_id}", expected_status=204)
        return Outcome.CHANGED

    def resize_node(self, name: str, capacity_gb: int) -> NodeResult:
        """Power the droplet down, resize it, and bring it back up.

        Returns:
            The droplet as last observed: the existing snapshot when it is
            already the target size, otherwise the one seen once active again

        Raises:
            NotFoundError: If no droplet has that name
        """
        droplet = self.find_droplet(name)
        decision = reconcile.decide_resize(droplet, capacity_gb)

        if isinstance(decision, reconcile.NotFound):
            raise NotFoundError(f"Droplet '{name}' does not exist, please check the name")
        if isinstance(decision, reconcile.NoOp):
            self.logger.info("Droplet already the target size.  Skipping")
            return NodeResult(snapshot=droplet, changed=False)

        self.logger.warning(f"Resizing node: {name} ({decision.reason})")
        resizer = NodeResizer(self, settings=self.settings, sleep=self.sleep, logger=self.logger)
        final = resizer.resize(droplet, capacity_gb)
        return NodeResult(snapshot=final, changed=True)

    def ensure_record(self, spec: DnsRecordSpec) -> Outcome:
        """Create the record if missing; refuse to touch one that differs.

        Raises:
            ConflictError: If the record exists with another type or value
        """
        existing = self.find_domain_record(spec.domain, spec.name)
        decision = reconcile.decide_record(existing, spec)

        if isinstance(decision, reconcile.NoOp):
            self.logger.info("SubDomain already exists and is correct")
            return Outcome.NOOP
        if isinstance(decision, reconcile.UpdateNeeded):
            self.logger.info("SubDomain already exists but needs to be updated")
            raise ConflictError(
                f"Updating record '{spec.name}.{spec.domain}' is not implemented ({decision.reason})"
            )

        self.logger.info("SubDomain does not exist, creating...")
        self.http.post(
            f"domains/{spec.domain.lower()}/records",
            {"type": spec.record_type, "name": spec.name.lower(), "data": spec.value},
        )
        return Outcome.CHANGED

    def delete_record(self, domain: str, name: str) -> Outcome:
        existing = self.find_domain_record(domain, name)
        decision = reconcile.decide_delete(existing.id if existing else None)

        if isinstance(decision, reconcile.NotFound):
            self.logger.info("SubDomain does not exist, nothing to do...")
            return Outcome.NOOP

        self.logger.warning(f"Deleting SubDomain {name.lower()}")
        self.http.delete(f"domains/{domain.lower()}/records/{decision.existing_id}", expected_status=204)
        return Outcome.CHANGED

    def ensure_floating_ip(self, spec: FloatingIpSpec) -> Outcome:
        bound = self.get_floating_ip(spec.ip)
        decision = reconcile.decide_binding(bound, spec)

        if isinstance(decision, reconcile.NoOp):
            self.logger.info("Node already assigned.  No work to do")
            return Outcome.NOOP

        self.logger.info("Node not already assigned.  Updating...")
        self.assign_floating_ip(spec.ip, spec.node_id)
        return Outcome.CHANGED
