"""Configuration loader for pgaudit-setup."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pgauditsetup.errors import SetupError

TEXT = "text"
NUMBER = "number"
FLAG = "flag"


class ConfigLoader:
    """Reads a YAML defaults file and normalizes each value to the type the CLI expects."""

    KEY_KINDS = {
        "container": TEXT,
        "user": TEXT,
        "database": TEXT,
        "password": TEXT,
        "custom_config": TEXT,
        "postgres_version": TEXT,
        "restart_delay": NUMBER,
        "no_log_file": FLAG,
        "verbose": FLAG,
        "dry_run": FLAG,
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        parsed = self._read(config_path)
        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise SetupError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(str(key) for key in set(parsed) - set(self.KEY_KINDS))
        if unknown:
            raise SetupError(f"Unknown configuration keys: {', '.join(unknown)}")

        return {key: self._normalize(key, value) for key, value in parsed.items() if value is not None}

    @staticmethod
    def _read(config_path: str) -> Any:
        path = Path(config_path)
        if not path.exists():
            raise SetupError(f"Config file not found: {config_path}")

        try:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise SetupError(f"Invalid config file '{config_path}': {exc}") from exc

    def _normalize(self, key: str, value: Any) -> Any:
        kind = self.KEY_KINDS[key]
        # YAML booleans are ints in Python; never accept them as text or numbers.
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)

        if kind == FLAG:
            if isinstance(value, bool):
                return value
            raise SetupError(f"Invalid value for '{key}': expected true or false, got {value!r}.")

        if kind == NUMBER:
            if is_number:
                return float(value)
            raise SetupError(f"Invalid value for '{key}': expected a number of seconds, got {value!r}.")

        if isinstance(value, str) or is_number:
            return str(value)
        raise SetupError(f"Invalid value for '{key}': expected text, got {value!r}.")
