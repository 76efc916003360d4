"""Per-run log file for pgaudit-setup."""

import logging
import os
from typing import Optional


class RunLogService:
    """Append-only, timestamped record of every command attempted in a run.

    Entries go to a dedicated logger that does not propagate, so command
    output reaches the file without flooding the console.
    """

    HEADER = "===== pgAudit Setup Log ====="
    LOGGER_NAME = "pgauditsetup.runlog"

    def __init__(self, log_file: str):
        self.log_file = log_file
        self._logger = logging.getLogger(self.LOGGER_NAME)
        self._handler: Optional[logging.FileHandler] = None

    def open(self):
        os.makedirs(os.path.dirname(self.log_file) or ".", exist_ok=True)
        with open(self.log_file, "w", encoding="utf-8") as file_obj:
            file_obj.write(f"{self.HEADER}\n\n")

        self._handler = logging.FileHandler(self.log_file, mode="a", encoding="utf-8")
        self._handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        self._logger.addHandler(self._handler)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

    def record(self, message: str):
        if self._handler is None:
            return
        self._logger.info(message)

    def close(self):
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
