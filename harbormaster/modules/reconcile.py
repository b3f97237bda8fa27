"""
Pure reconcile decisions.

Each ``decide_*`` function compares what the provider reported (or None when
the resource does not exist) with what the caller asked for. Nothing here
talks to a provider; the provider modules execute the decision.
"""
from dataclasses import dataclass
from typing import Any, Optional, Union

from harbormaster.models import DnsRecordSnapshot, DnsRecordSpec, FloatingIpSpec, NodeSnapshot, NodeSpec


@dataclass(frozen=True)
class Create:
    spec: Any


@dataclass(frozen=True)
class UpdateNeeded:
    existing_id: Any
    spec: Any
    reason: str = ''


@dataclass(frozen=True)
class NoOp:
    pass


@dataclass(frozen=True)
class Delete:
    existing_id: Any


@dataclass(frozen=True)
class NotFound:
    pass


ReconcileDecision = Union[Create, UpdateNeeded, NoOp, Delete, NotFound]


def decide_node(existing: Optional[NodeSnapshot], spec: NodeSpec) -> ReconcileDecision:
    # An existing droplet is left alone, whatever its size or region
    if existing is None:
        return Create(spec)
    return NoOp()


def decide_delete(existing_id: Optional[Any]) -> ReconcileDecision:
    if existing_id is None:
        return NotFound()
    return Delete(existing_id)


def decide_resize(existing: Optional[NodeSnapshot], capacity_gb: int) -> ReconcileDecision:
    if existing is None:
        return NotFound()
    if existing.capacity_gb == capacity_gb:
        return NoOp()
    return UpdateNeeded(existing.id, capacity_gb, reason=f"{existing.capacity_gb}gb -> {capacity_gb}gb")


def decide_record(existing: Optional[DnsRecordSnapshot], spec: DnsRecordSpec) -> ReconcileDecision:
    if existing is None:
        return Create(spec)
    if existing.record_type != spec.record_type:
        return UpdateNeeded(existing.id, spec, reason=f"type {existing.record_type} != {spec.record_type}")
    if existing.value != spec.value:
        return UpdateNeeded(existing.id, spec, reason=f"value {existing.value} != {spec.value}")
    return NoOp()


def decide_binding(bound_node_id: Optional[int], spec: FloatingIpSpec) -> ReconcileDecision:
    if bound_node_id == spec.node_id:
        return NoOp()
    return UpdateNeeded(spec.ip, spec, reason=f"bound to {bound_node_id}")
