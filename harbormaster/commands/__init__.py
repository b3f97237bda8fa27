"""Shared plumbing for the CLI command groups."""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import typer

from harbormaster.config import HarbormasterConfig, load_config
from harbormaster.errors import ConfigError, HarbormasterError
from harbormaster.models import Outcome
from harbormaster.modules import CloudflareClient, DigitalOceanClient

T = TypeVar('T')

EXIT_CONFIG_ERROR = 1
EXIT_OPERATION_FAILED = 2


@dataclass
class CliState:
    """Options from the root callback, handed to every command via ctx.obj."""
    config_path: Optional[str] = None
    logger: logging.Logger = logging.getLogger("harbormaster")
    _config: Optional[HarbormasterConfig] = None

    @property
    def config(self) -> HarbormasterConfig:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    def digitalocean(self) -> DigitalOceanClient:
        return DigitalOceanClient.from_config(self.config.require_digital_ocean())

    def cloudflare(self) -> CloudflareClient:
        return CloudflareClient.from_config(self.config.require_cloudflare())


def state(ctx: typer.Context) -> CliState:
    if ctx.obj is None:
        ctx.obj = CliState()
    return ctx.obj


def run(ctx: typer.Context, operation: Callable[[CliState], T]) -> T:
    """Run operation, turning harbormaster errors into exit codes."""
    cli_state = state(ctx)
    try:
        return operation(cli_state)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    except HarbormasterError as e:
        cli_state.logger.debug("Operation failed", exc_info=True)
        typer.echo(str(e), err=True)
        raise typer.Exit(code=EXIT_OPERATION_FAILED)


def report(outcome: Outcome) -> None:
    if outcome is Outcome.CHANGED:
        typer.echo("Success: changes applied")
    else:
        typer.echo("Success: already up to date")
