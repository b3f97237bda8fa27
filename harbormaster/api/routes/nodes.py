from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from harbormaster.api.dependencies import get_digitalocean
from harbormaster.models import NodeSpec
from harbormaster.modules import DigitalOceanClient

router = APIRouter(prefix="/nodes")


class EnsureNodeRequest(BaseModel):
    name: str
    region: str
    size: int = Field(..., ge=1)
    image: str
    ssh_key: Optional[str] = None
    tag: Optional[str] = None


class DeleteNodeRequest(BaseModel):
    name: str


class ResizeNodeRequest(BaseModel):
    name: str
    size: int = Field(..., ge=1)


@router.post("/ensure")
def ensure_node(req: EnsureNodeRequest, client: DigitalOceanClient = Depends(get_digitalocean)):
    spec = NodeSpec(
        name=req.name,
        region=req.region,
        capacity_gb=req.size,
        image=req.image,
        ssh_key=req.ssh_key,
        tag=req.tag,
    )
    result = client.ensure_node(spec)
    return {"outcome": result.outcome.value, "droplet": result.snapshot.to_dict()}


@router.post("/delete")
def delete_node(req: DeleteNodeRequest, client: DigitalOceanClient = Depends(get_digitalocean)):
    return {"outcome": client.delete_node(req.name).value}


@router.post("/resize")
def resize_node(req: ResizeNodeRequest, client: DigitalOceanClient = Depends(get_digitalocean)):
    result = client.resize_node(req.name, req.size)
    return {"outcome": result.outcome.value, "droplet": result.snapshot.to_dict()}
