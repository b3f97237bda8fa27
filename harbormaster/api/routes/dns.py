from enum import Enum

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from harbormaster.api.dependencies import get_dns_client_factory
from harbormaster.models import DnsRecordSpec

router = APIRouter(prefix="/dns")


class DnsProvider(str, Enum):
    do = "do"
    cf = "cf"


class EnsureRecordRequest(BaseModel):
    domain: str
    sub_domain: str
    value: str
    type: str = "A"
    provider: DnsProvider = DnsProvider.do


class DeleteRecordRequest(BaseModel):
    domain: str
    sub_domain: str
    provider: DnsProvider = DnsProvider.do


@router.post("/ensure")
def ensure_record(req: EnsureRecordRequest, client_for=Depends(get_dns_client_factory)):
    spec = DnsRecordSpec(domain=req.domain, record_type=req.type.upper(), name=req.sub_domain, value=req.value)
    return {"outcome": client_for(req.provider.value).ensure_record(spec).value}


@router.post("/delete")
def delete_record(req: DeleteRecordRequest, client_for=Depends(get_dns_client_factory)):
    client = client_for(req.provider.value)
    if req.provider is DnsProvider.cf:
        outcome = client.delete_record(req.sub_domain)
    else:
        outcome = client.delete_record(req.domain, req.sub_domain)
    return {"outcome": outcome.value}
