from enum import Enum

import typer

from harbormaster.commands import report, run
from harbormaster.models import DnsRecordSpec

app = typer.Typer()


class Provider(str, Enum):
    do = "do"
    cf = "cf"


@app.command("assign")
def assign_record_cmd(
    ctx: typer.Context,
    domain: str = typer.Option(..., "--domain", "-d", help="Domain name we're targeting. ie 'google.com'"),
    sub_domain: str = typer.Option(..., "--sub-domain", "--sd", help="Subdomain name we're targeting. ie 'www'"),
    ip: str = typer.Option(..., help="Value of the record, usually an IP address"),
    record_type: str = typer.Option("A", "--type", "-t", help="Type of record. ie 'A' or 'AAAA' etc"),
    provider: Provider = typer.Option(Provider.do, help="DNS provider"),
):
    """Make sure a DNS record exists with the given type and value."""
    spec = DnsRecordSpec(domain=domain, record_type=record_type.upper(), name=sub_domain, value=ip)
    if provider is Provider.cf:
        outcome = run(ctx, lambda s: s.cloudflare().ensure_record(spec))
    else:
        outcome = run(ctx, lambda s: s.digitalocean().ensure_record(spec))
    report(outcome)


@app.command("delete")
def delete_record_cmd(
    ctx: typer.Context,
    domain: str = typer.Option(..., "--domain", "-d", help="Domain name we're targeting"),
    sub_domain: str = typer.Option(..., "--sub-domain", "--sd", help="Subdomain to remove"),
    provider: Provider = typer.Option(Provider.do, help="DNS provider"),
):
    """Delete a DNS record if it exists."""
    if provider is Provider.cf:
        outcome = run(ctx, lambda s: s.cloudflare().delete_record(sub_domain))
    else:
        outcome = run(ctx, lambda s: s.digitalocean().delete_record(domain, sub_domain))
    report(outcome)
