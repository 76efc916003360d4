"""Docker container helpers for pgaudit-setup."""

import time
from typing import List

from pgauditsetup.errors import SetupError
from pgauditsetup.errors_catalog import actionable_error


class ContainerService:
    """Running-state checks, the post-restart pause and the rollback hint."""

    def __init__(self, logger, console):
        self.logger = logger
        self.console = console

    @staticmethod
    def _matches(container: str, row: str) -> bool:
        """Match a `docker ps --no-trunc --format '{{.ID}} {{.Names}}'` row the way docker does:
        an exact name first, otherwise a prefix of the full container ID."""
        container_id, _, names = row.strip().partition(" ")
        if container in [name.strip() for name in names.split(",")]:
            return True
        return bool(container_id) and container_id.startswith(container.lower())

    def ensure_running(self, container: str, ps_output: str):
        container = container.lstrip("/")
        rows = [row for row in (ps_output or "").splitlines() if row.strip()]
        if not any(self._matches(container, row) for row in rows):
            raise SetupError(actionable_error("container_not_running", container=container))
        self.logger.debug("Container %s is running.", container)

    def wait_after_restart(self, delay: float):
        if delay <= 0:
            return
        self.console.print(f"[yellow]Waiting {delay:g} seconds for PostgreSQL to come up...[/yellow]")
        self.logger.info("Waiting %.1fs after container restart.", delay)
        time.sleep(delay)

    def rollback_commands(self, container: str) -> List[str]:
        return [
            f"docker exec {container} bash -c 'cp \"$PGDATA/postgresql.conf.bak\" \"$PGDATA/postgresql.conf\"'",
            f"docker restart {container}",
        ]
