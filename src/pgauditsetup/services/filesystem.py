"""Filesystem helpers for pgaudit-setup."""

import logging
import os
from datetime import datetime, timezone
from typing import Optional


class FileSystemService:
    """Encapsulates local directory and filename side effects."""

    def __init__(self, logger: logging.Logger, root: Optional[str] = None):
        self.logger = logger
        self.root = root or os.getcwd()

    @staticmethod
    def timestamp(now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H-%M-%S")

    def ensure_dir(self, name: str) -> str:
        path = os.path.join(self.root, name)
        if not os.path.isdir(path):
            os.makedirs(path, exist_ok=True)
            self.logger.debug("Created directory: %s", path)
        return path

    def timestamped_path(self, directory: str, prefix: str, timestamp: str, suffix: str = "") -> str:
        return os.path.join(self.root, directory, f"{prefix}.{timestamp}{suffix}")
