"""Preflight validation helpers for pgaudit-setup."""

import os
import re

from pgauditsetup.errors import SetupError
from pgauditsetup.errors_catalog import actionable_error
from pgauditsetup.models import RunConfig


class ValidationService:
    """Rejects unusable input before any external command is invoked."""

    CONTAINER_NAME_PATTERN = re.compile(r"^/?[a-zA-Z0-9][a-zA-Z0-9_.-]+$")

    def validate_container_name(self, container: str):
        if not container or not self.CONTAINER_NAME_PATTERN.match(container):
            raise SetupError(actionable_error("invalid_container_name", container=container or "<empty>"))

    def validate_postgres_version(self, postgres_version: str):
        if not str(postgres_version).isdigit():
            raise SetupError(
                f"PostgreSQL version must be a major version number such as 16 or 17, got '{postgres_version}'."
            )

    def validate_restart_delay(self, restart_delay: float):
        if restart_delay < 0:
            raise SetupError("Restart delay must be zero or a positive number of seconds.")

    def validate_custom_config(self, path: str):
        if not os.path.isfile(path):
            raise SetupError(actionable_error("custom_config_not_found", path=path))

    def validate(
        self,
        config: RunConfig,
        custom_config: str,
        postgres_version: str,
        restart_delay: float,
    ):
        self.validate_container_name(config.container)
        self.validate_postgres_version(postgres_version)
        self.validate_restart_delay(restart_delay)
        self.validate_custom_config(custom_config)
