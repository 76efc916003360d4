"""Actionable error catalog for pgaudit-setup."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "container_required": {
        "what": "Container name is required.",
        "next": (
            "Provide it with `--container` or `-c`, for example "
            "`pgaudit-setup --container my-postgres-container`. Run with `--help` for more information."
        ),
    },
    "invalid_container_name": {
        "what": "Invalid container name: {container}",
        "next": "Use the container name or ID shown by `docker ps`.",
    },
    "container_not_running": {
        "what": "Container '{container}' is not running.",
        "next": "Start it with `docker start {container}` or check the name with `docker ps`.",
    },
    "custom_config_not_found": {
        "what": "Custom PostgreSQL configuration not found: {path}",
        "next": "Create the file or point `--custom-config` to an existing one.",
    },
    "step_failed": {
        "what": "Step '{step}' failed.",
        "next": "Inspect {log_hint}, fix the cause and run the setup again.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
