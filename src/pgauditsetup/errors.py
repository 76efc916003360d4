"""Domain errors for pgaudit-setup."""


class SetupError(RuntimeError):
    """Raised when the setup cannot continue safely."""
