import typer

from harbormaster.commands import report, run
from harbormaster.models import FloatingIpSpec

app = typer.Typer()


@app.command("assign")
def assign_floating_ip_cmd(
    ctx: typer.Context,
    ip: str = typer.Option(..., help="Floating IP address we're targeting"),
    node: int = typer.Option(..., min=1, help="Droplet id to bind the address to"),
):
    """Bind a floating IP to a droplet, unless it already is."""
    spec = FloatingIpSpec(ip=ip, node_id=node)
    report(run(ctx, lambda s: s.digitalocean().ensure_floating_ip(spec)))
