"""Droplet resize workflow.

A droplet can only be resized while powered off, and the provider applies
the new size asynchronously, holding a lock on the droplet until it is done:

    running -> shutting_down -> powered_off -> resizing -> starting_up -> active
"""
import logging
import time
from typing import Optional

from harbormaster.config import PollSettings
from harbormaster.errors import PollTimeoutError
from harbormaster.models import NodeSnapshot, ResizePhase, size_slug
from harbormaster.modules.polling import Sleep, poll_until

logger = logging.getLogger(__name__)


class NodeResizer:
    """Drives one droplet through a resize.

    ``client`` is a DigitalOceanClient; only its ``get_droplet`` and
    ``droplet_action`` methods are used.
    """

    def __init__(self, client, settings: Optional[PollSettings] = None,
                 sleep: Sleep = time.sleep, logger: Optional[logging.Logger] = None):
        self.client = client
        self.settings = settings or PollSettings()
        self.sleep = sleep
        self.logger = logger or logging.getLogger(f"{__name__}.NodeResizer")
        self.phase = ResizePhase.RUNNING

    def _enter(self, phase: ResizePhase) -> None:
        self.logger.debug(f"Resize phase {self.phase.value} -> {phase.value}")
        self.phase = phase

    def _wait_for_status(self, droplet_id: int, status: str) -> NodeSnapshot:
        return poll_until(
            lambda: self.client.get_droplet(droplet_id),
            lambda d: d.status == status,
            target=f"droplet {droplet_id} status '{status}'",
            interval=self.settings.status_interval,
            max_attempts=self.settings.status_attempts,
            sleep=self.sleep,
            log=self.logger,
        )

    def shutdown(self, droplet: NodeSnapshot) -> None:
        """Graceful shutdown, escalating to a hard power off if it takes too long."""
        self._enter(ResizePhase.SHUTTING_DOWN)
        self.logger.info("Shutting down node")
        self.client.droplet_action(droplet.id, "shutdown")

        try:
            self._wait_for_status(droplet.id, "off")
        except PollTimeoutError:
            # the provider honours a hard power off promptly, so it is not re-checked
            self.logger.info("Powering OFF node")
            self.client.droplet_action(droplet.id, "power_off")
            self.sleep(self.settings.power_off_settle_delay)
        self._enter(ResizePhase.POWERED_OFF)

    def resize(self, droplet: NodeSnapshot, capacity_gb: int) -> NodeSnapshot:
        """Run the whole workflow and return the droplet once it is active again.

        Raises:
            PollTimeoutError: If the droplet does not become active after power on
        """
        self.shutdown(droplet)

        self._enter(ResizePhase.RESIZING)
        self.logger.info(f"Resizing node '{droplet.name}' to {capacity_gb}gb")
        self.client.droplet_action(droplet.id, "resize", size=size_slug(capacity_gb))

        # no attempt ceiling: the resize takes as long as the provider needs,
        # and power_on is rejected while the droplet is locked
        self.logger.info("Waiting for node to finish resize")
        poll_until(
            lambda: self.client.get_droplet(droplet.id),
            lambda d: not d.locked,
            target=f"droplet {droplet.id} to unlock",
            interval=self.settings.lock_interval,
            sleep=self.sleep,
            log=self.logger,
        )

        self._enter(ResizePhase.STARTING_UP)
        self.logger.info("Powering ON node")
        self.client.droplet_action(droplet.id, "power_on")

        final = self._wait_for_status(droplet.id, "active")
        self._enter(ResizePhase.ACTIVE)
        return final
