from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from harbormaster.api.dependencies import get_digitalocean
from harbormaster.models import FloatingIpSpec
from harbormaster.modules import DigitalOceanClient

router = APIRouter(prefix="/floating-ips")


class AssignFloatingIpRequest(BaseModel):
    ip: str
    node_id: int = Field(..., ge=1)


@router.post("/ensure")
def ensure_floating_ip(req: AssignFloatingIpRequest, client: DigitalOceanClient = Depends(get_digitalocean)):
    return {"outcome": client.ensure_floating_ip(FloatingIpSpec(ip=req.ip, node_id=req.node_id)).value}
