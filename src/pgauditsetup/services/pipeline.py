"""Ordered step list for the pgAudit installation."""

from typing import Dict, List, Tuple

from pgauditsetup.constants import (
    AUDIT_SETTINGS,
    BUILD_PACKAGES,
    CONTAINER_CONF_PATH,
    CONTAINER_CUSTOM_CONF_PATH,
    DOCKER_PS_FORMAT,
    PASSWORD_ENV_VAR,
    PGAUDIT_CHECKOUT_DIR,
    PGAUDIT_REPOSITORY,
)
from pgauditsetup.models import RunConfig, RunContext, Step

VERIFY_QUERY = "SELECT name, setting FROM pg_settings WHERE name LIKE 'pgaudit%';"


def _escape(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


def _psql(sql: str) -> Tuple[str, ...]:
    return (
        "docker",
        "exec",
        "-e",
        PASSWORD_ENV_VAR,
        "{container}",
        "psql",
        "-U",
        "{user}",
        "-d",
        "{database}",
        "-v",
        "ON_ERROR_STOP=1",
        "-c",
        _escape(sql),
    )


def _bash(script: str) -> Tuple[str, ...]:
    return ("docker", "exec", "{container}", "bash", "-c", script)


_BUILD_SCRIPT = " && ".join(
    [
        f"rm -rf {PGAUDIT_CHECKOUT_DIR}",
        f"git clone {PGAUDIT_REPOSITORY} {PGAUDIT_CHECKOUT_DIR}",
        f"cd {PGAUDIT_CHECKOUT_DIR}",
        "git checkout {pgaudit_branch}",
        "make USE_PGXS=1",
        "make install USE_PGXS=1",
        "cd /",
        f"rm -rf {PGAUDIT_CHECKOUT_DIR}",
    ]
)

STEPS: Tuple[Step, ...] = (
    Step(
        name="check_container",
        description="Checking that the container is running...",
        command=("docker", "ps", "--no-trunc", "--format", "{ps_format}"),
        requires_running_container=True,
    ),
    Step(
        name="backup_config_in_place",
        description="Backing up postgresql.conf...",
        command=_bash('cp "$PGDATA/postgresql.conf" "$PGDATA/postgresql.conf.bak"'),
    ),
    Step(
        name="backup_config_local",
        command=("docker", "cp", "{container}:{container_conf_path}", "{backup_file}"),
    ),
    Step(
        name="install_build_dependencies",
        description="Installing build dependencies...",
        command=_bash("apt-get update && apt-get install -y {build_packages}"),
    ),
    Step(
        name="build_pgaudit",
        description="Cloning & building pgAudit...",
        command=_bash(_BUILD_SCRIPT),
    ),
    Step(
        name="copy_custom_config",
        description="Applying custom configuration...",
        command=("docker", "cp", "{custom_config_file}", "{container}:{container_custom_conf_path}"),
    ),
    Step(
        name="apply_custom_config",
        command=_bash('cp {container_custom_conf_path} "$PGDATA/postgresql.conf"'),
    ),
    Step(
        name="restart_container",
        description="Restarting PostgreSQL container...",
        command=("docker", "restart", "{container}"),
        restarts_container=True,
    ),
    Step(
        name="create_extension",
        description="Creating pgAudit extension...",
        command=_psql("CREATE EXTENSION IF NOT EXISTS pgaudit;"),
        needs_password=True,
    ),
) + tuple(
    Step(
        name=f"set_{setting.replace('.', '_')}",
        command=_psql(f"ALTER SYSTEM SET {setting} = {value};"),
        needs_password=True,
    )
    for setting, value in AUDIT_SETTINGS
) + (
    Step(
        name="reload_config",
        command=_psql("SELECT pg_reload_conf();"),
        needs_password=True,
    ),
    Step(
        name="verify_installation",
        description="Verifying pgAudit installation...",
        command=_psql(VERIFY_QUERY),
        needs_password=True,
        show_output=True,
    ),
)


class PipelineService:
    """Renders the fixed step list against one run's configuration."""

    def __init__(self, steps: Tuple[Step, ...] = STEPS):
        self.steps = steps

    @staticmethod
    def template_values(config: RunConfig, context: RunContext) -> Dict[str, str]:
        packages = " ".join(BUILD_PACKAGES).format(postgres_version=context.postgres_version)
        return {
            "container": config.container,
            "user": config.user,
            "database": config.database,
            "ps_format": DOCKER_PS_FORMAT,
            "container_conf_path": CONTAINER_CONF_PATH,
            "container_custom_conf_path": CONTAINER_CUSTOM_CONF_PATH,
            "backup_file": context.backup_file,
            "custom_config_file": context.custom_config_file,
            "build_packages": packages,
            "pgaudit_branch": f"REL_{context.postgres_version}_STABLE",
        }

    def render(self, step: Step, values: Dict[str, str]) -> List[str]:
        return [part.format(**values) for part in step.command]

    def plan(self, config: RunConfig, context: RunContext) -> List[Tuple[Step, List[str]]]:
        values = self.template_values(config, context)
        return [(step, self.render(step, values)) for step in self.steps]
