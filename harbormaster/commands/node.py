import typer

from harbormaster.commands import report, run
from harbormaster.models import NodeSpec
from harbormaster.modules.utils import export_snapshot

app = typer.Typer()


@app.command("create")
def create_node_cmd(
    ctx: typer.Context,
    name: str = typer.Option(..., help="Droplet name"),
    region: str = typer.Option(..., help="Region slug, e.g. nyc3"),
    size: int = typer.Option(..., min=1, help="Memory size in GB"),
    image: str = typer.Option(..., help="Image slug, e.g. ubuntu-22-04-x64"),
    ssh_key: str = typer.Option(None, help="SSH key id or fingerprint to install"),
    tag: str = typer.Option(None, help="Tag to put on the droplet"),
    output: str = typer.Option(None, help="Write the droplet snapshot to this file"),
):
    """Create a droplet unless one with this name already exists."""
    spec = NodeSpec(name=name, region=region, capacity_gb=size, image=image, ssh_key=ssh_key, tag=tag)
    result = run(ctx, lambda s: s.digitalocean().ensure_node(spec))
    if output:
        export_snapshot(result.snapshot, output)
    report(result.outcome)


@app.command("delete")
def delete_node_cmd(
    ctx: typer.Context,
    name: str = typer.Option(..., help="Droplet name"),
):
    """Delete a droplet if it exists."""
    report(run(ctx, lambda s: s.digitalocean().delete_node(name)))


@app.command("resize")
def resize_node_cmd(
    ctx: typer.Context,
    name: str = typer.Option(..., help="Droplet name"),
    size: int = typer.Option(..., min=1, help="Target memory size in GB"),
    output: str = typer.Option(None, help="Write the droplet snapshot to this file"),
):
    """Power a droplet off, resize it, and power it back on."""
    result = run(ctx, lambda s: s.digitalocean().resize_node(name, size))
    if output:
        export_snapshot(result.snapshot, output)
    report(result.outcome)
