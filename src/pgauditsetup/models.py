"""Shared domain models for pgaudit-setup."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import DEFAULT_DATABASE, DEFAULT_PASSWORD, DEFAULT_USER


@dataclass(frozen=True)
class RunConfig:
    """Target container and database credentials for one run."""

    container: str
    user: str = DEFAULT_USER
    database: str = DEFAULT_DATABASE
    password: str = DEFAULT_PASSWORD

    @property
    def masked_password(self) -> str:
        return "*" * len(self.password)


@dataclass(frozen=True)
class RunContext:
    """Paths and identifiers derived once at the start of a run."""

    timestamp: str
    log_file: Optional[str]
    backup_file: str
    custom_config_file: str
    postgres_version: str


@dataclass(frozen=True)
class Step:
    """Declarative description of one external command in the setup pipeline.

    ``command`` is an argument list whose items may contain ``{placeholder}``
    fields, filled from the run configuration when the step is rendered.
    """

    name: str
    command: Tuple[str, ...]
    description: Optional[str] = None
    log_output: bool = True
    show_output: bool = False
    needs_password: bool = False
    requires_running_container: bool = False
    restarts_container: bool = False
