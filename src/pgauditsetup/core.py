import logging
import os
import subprocess
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .constants import (
    BACKUP_FILE_PREFIX,
    BACKUPS_DIR,
    DEFAULT_CUSTOM_CONFIG,
    DEFAULT_POSTGRES_VERSION,
    DEFAULT_RESTART_DELAY,
    LOG_FILE_PREFIX,
    LOGS_DIR,
    PASSWORD_ENV_VAR,
)
from .errors import SetupError
from .errors_catalog import actionable_error
from .models import RunConfig, RunContext, Step
from .services.command_runner import CommandRunner
from .services.container import ContainerService
from .services.filesystem import FileSystemService
from .services.pipeline import PipelineService
from .services.run_log import RunLogService
from .services.validation import ValidationService

console = Console()
logger = logging.getLogger("pgauditsetup")


class PgAuditSetup:
    """Installs pgAudit in a running PostgreSQL container, one command at a time."""

    def __init__(
        self,
        config: RunConfig,
        custom_config: str = DEFAULT_CUSTOM_CONFIG,
        postgres_version: str = DEFAULT_POSTGRES_VERSION,
        restart_delay: float = DEFAULT_RESTART_DELAY,
        log_to_file: bool = True,
        dry_run: bool = False,
    ):
        self.config = config
        self.postgres_version = str(postgres_version)
        self.restart_delay = float(restart_delay)
        self.log_to_file = log_to_file
        self.dry_run = dry_run

        self.cwd = os.getcwd()
        self.custom_config = os.path.normpath(os.path.join(self.cwd, custom_config))

        self.filesystem_service = FileSystemService(logger=logger, root=self.cwd)
        self.validation_service = ValidationService()
        self.container_service = ContainerService(logger=logger, console=console)
        self.pipeline_service = PipelineService()

        self.context = self._build_run_context()
        self.run_log: Optional[RunLogService] = (
            RunLogService(self.context.log_file) if self.context.log_file else None
        )
        self.command_runner = CommandRunner(logger=logger, run_log=self.run_log)
        self.current_step_name: Optional[str] = None

    def _build_run_context(self) -> RunContext:
        timestamp = self.filesystem_service.timestamp()
        log_file = None
        if self.log_to_file:
            log_file = self.filesystem_service.timestamped_path(
                LOGS_DIR, LOG_FILE_PREFIX, timestamp, suffix=".log"
            )
        return RunContext(
            timestamp=timestamp,
            log_file=log_file,
            backup_file=self.filesystem_service.timestamped_path(
                BACKUPS_DIR, BACKUP_FILE_PREFIX, timestamp
            ),
            custom_config_file=self.custom_config,
            postgres_version=self.postgres_version,
        )

    def _step_env(self, step: Step) -> Optional[Dict[str, str]]:
        if not step.needs_password:
            return None
        env = dict(os.environ)
        env[PASSWORD_ENV_VAR] = self.config.password
        return env

    def _run_cmd(
        self,
        cmd: List[str],
        env: Optional[Dict[str, str]] = None,
        log_output: bool = True,
    ) -> subprocess.CompletedProcess:
        return self.command_runner.run(
            cmd,
            env=env,
            log_output=log_output,
        )

    def _run_step(self, step: Step, cmd: List[str]):
        if step.description:
            console.print(f"[blue]{step.description}[/blue]")
            logger.debug(step.description)

        self.current_step_name = step.name
        result = self._run_cmd(cmd, env=self._step_env(step), log_output=step.log_output)

        if step.requires_running_container:
            self.container_service.ensure_running(self.config.container, result.stdout)
        if step.show_output and result.stdout:
            console.print(escape(result.stdout.rstrip()))
        if step.restarts_container:
            self.container_service.wait_after_restart(self.restart_delay)

        self.current_step_name = None
        return result

    def validate(self):
        self.validation_service.validate(
            self.config,
            custom_config=self.custom_config,
            postgres_version=self.postgres_version,
            restart_delay=self.restart_delay,
        )

    def prepare_environment(self):
        if self.run_log is not None:
            self.filesystem_service.ensure_dir(LOGS_DIR)
            self.run_log.open()
            logger.info("Logging commands to %s", self.context.log_file)
        self.filesystem_service.ensure_dir(BACKUPS_DIR)

    def print_configuration(self):
        console.print("[bold]===== pgAudit Setup =====[/bold]")
        console.print("Configuration:")
        console.print(f"   Container: {escape(self.config.container)}")
        console.print(f"   User: {escape(self.config.user)}")
        console.print(f"   Database: {escape(self.config.database)}")
        console.print(f"   Password: {self.config.masked_password}")
        console.print("")

    def print_plan(self):
        table = Table(title="pgAudit setup plan")
        table.add_column("#", justify="right")
        table.add_column("Step")
        table.add_column("Command")
        for index, (step, cmd) in enumerate(self.pipeline_service.plan(self.config, self.context), 1):
            table.add_row(str(index), step.name, escape(CommandRunner.format_command(cmd)))
        console.print(table)

    def print_rollback_hint(self):
        console.print("[bold]To rollback config:[/bold]")
        for command in self.container_service.rollback_commands(self.config.container):
            console.print(escape(command))

    def _log_hint(self) -> str:
        if self.context.log_file:
            return f"`{self.context.log_file}`"
        return "the console output above"

    def run(self) -> int:
        try:
            self.validate()
            self.print_configuration()

            if self.dry_run:
                self.print_plan()
                console.print("[yellow]Dry run: no commands were executed.[/yellow]")
                return 0

            self.prepare_environment()
            for step, cmd in self.pipeline_service.plan(self.config, self.context):
                self._run_step(step, cmd)

            console.print("[green]pgAudit installed and configured successfully![/green]")
            console.print(
                "Setup complete! You can now test logging by running SQL queries and checking logs.\n"
            )
            self.print_rollback_hint()
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except SetupError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
            logger.error(str(exc))
            if self.current_step_name:
                message = actionable_error(
                    "step_failed", step=self.current_step_name, log_hint=self._log_hint()
                )
                console.print(escape(message))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(exc))}")
            logger.exception("Unexpected error")
            return 1
        finally:
            if self.run_log is not None:
                self.run_log.close()
