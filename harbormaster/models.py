"""Data models for harbormaster."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Outcome(str, Enum):
    """Result of a reconcile operation that did not fail."""
    NOOP = 'noop'
    CHANGED = 'changed'


class ResizePhase(str, Enum):
    """Phases a droplet passes through while being resized."""
    RUNNING = 'running'
    SHUTTING_DOWN = 'shutting_down'
    POWERED_OFF = 'powered_off'
    RESIZING = 'resizing'
    STARTING_UP = 'starting_up'
    ACTIVE = 'active'


def size_slug(capacity_gb: int) -> str:
    """Provider size slug for a memory capacity in whole gigabytes."""
    return f"{capacity_gb}gb"


@dataclass(frozen=True)
class NodeSpec:
    """Desired state of a droplet."""
    name: str
    region: str
    capacity_gb: int
    image: str
    ssh_key: Optional[str] = None
    tag: Optional[str] = None


@dataclass(frozen=True)
class DnsRecordSpec:
    """Desired state of a DNS record."""
    domain: str
    record_type: str
    name: str
    value: str


@dataclass(frozen=True)
class FloatingIpSpec:
    """Desired binding of a floating IP to a droplet."""
    ip: str
    node_id: int


@dataclass
class NetworkAddress:
    ip: str
    netmask: str = ''
    gateway: str = ''
    type: str = ''


@dataclass
class NodeSnapshot:
    """A droplet as the provider reported it at one point in time."""
    id: int
    name: str
    memory: int
    status: str
    locked: bool = False
    networks: List[NetworkAddress] = field(default_factory=list)

    @property
    def capacity_gb(self) -> int:
        return self.memory // 1024

    @property
    def public_ip(self) -> Optional[str]:
        for network in self.networks:
            if network.type == 'public':
                return network.ip
        return None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'NodeSnapshot':
        """Create from a droplet object in a provider response."""
        networks = [
            NetworkAddress(
                ip=net.get('ip_address', ''),
                netmask=net.get('netmask', ''),
                gateway=net.get('gateway', ''),
                type=net.get('type', ''),
            )
            for net in (data.get('networks') or {}).get('v4', [])
        ]
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            memory=data.get('memory', 0),
            status=data.get('status', ''),
            locked=bool(data.get('locked', False)),
            networks=networks,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['capacity_gb'] = self.capacity_gb
        data['public_ip'] = self.public_ip
        return data


@dataclass
class DnsRecordSnapshot:
    """A DNS record as the provider reported it."""
    id: str
    record_type: str
    name: str
    value: str
    zone_name: str = ''

    @classmethod
    def from_digitalocean(cls, data: Dict[str, Any]) -> 'DnsRecordSnapshot':
        return cls(
            id=str(data['id']),
            record_type=data.get('type', ''),
            name=data.get('name', ''),
            value=data.get('data', ''),
        )

    @classmethod
    def from_cloudflare(cls, data: Dict[str, Any]) -> 'DnsRecordSnapshot':
        return cls(
            id=str(data['id']),
            record_type=data.get('type', ''),
            name=data.get('name', ''),
            value=data.get('content', ''),
            zone_name=data.get('zone_name', ''),
        )


@dataclass
class NodeResult:
    """Snapshot of a node after ensure or resize, and whether it changed."""
    snapshot: NodeSnapshot
    changed: bool

    @property
    def outcome(self) -> Outcome:
        return Outcome.CHANGED if self.changed else Outcome.NOOP


@dataclass
class PollState:
    """Bookkeeping for one polling call."""
    target: str
    interval: float
    max_attempts: Optional[int] = None
    attempts: int = 0

    @property
    def exhausted(self) -> bool:
        return self.max_attempts is not None and self.attempts >= self.max_attempts
