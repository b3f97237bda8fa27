import logging
import sys

import typer

from harbormaster import __version__
from harbormaster.commands import CliState, dns, floating_ip, node
from harbormaster.logging import level_for, setup_logger

app = typer.Typer(help="HarborMaster - keep droplets, DNS records and floating IPs where you want them.")

EXAMPLES = """
Examples
#1
To set a specific node to a floating ip address you could do this:
harbormaster floating-ip assign --node 30871086 --ip 192.168.1.2

You can find the ID of a node in the url in the droplets dashboard

#2
To point www.example.com at an address:
harbormaster dns assign -d example.com --sd www --ip 192.168.1.2
"""


def setup_logging(verbose: bool = False, debug_mode: bool = False) -> logging.Logger:
    """Configure the harbormaster logger based on the verbosity switches."""
    logger = setup_logger("harbormaster", level_for(verbose=verbose, debug=debug_mode))
    # Disable debug logging for noisy libraries
    if not debug_mode:
        logging.getLogger('urllib3').setLevel(logging.WARNING)
    return logger


# Add all command groups
app.add_typer(node.app, name="node", help="Create, delete and resize droplets")
app.add_typer(dns.app, name="dns", help="Manage DNS records")
app.add_typer(floating_ip.app, name="floating-ip", help="Manage floating IP bindings")


# Global options callback
@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: str = typer.Option(None, "--config", "-c", help="Path to the harbormaster config file"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Super verbose output, including raw responses"),
    version: bool = typer.Option(False, "--version", "-v", help="Version"),
    examples: bool = typer.Option(False, "--examples", help="Examples"),
):
    """HarborMaster - Digital Ocean and Cloudflare reconciliation CLI."""
    if version:
        typer.echo(f"HarborMaster: {__version__}")
        raise typer.Exit()
    if examples:
        typer.echo(EXAMPLES)
        raise typer.Exit()

    logger = setup_logging(verbose, debug)
    if debug:
        logger.debug("Debug mode enabled")
    ctx.obj = CliState(config_path=config, logger=logger)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
):
    """Run the HTTP API (requires HARBORMASTER_API_KEY)."""
    import uvicorn
    uvicorn.run("harbormaster.api.main:app", host=host, port=port)


if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        logging.error(f"Error: {e}")
        sys.exit(1)
