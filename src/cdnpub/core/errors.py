"""Build error types; every one of them aborts the whole run"""


class BuildError(RuntimeError):
    """Fatal build failure: unreadable or unwritable file, invalid JSON."""


class ConfigError(BuildError):
    """Curated root index is missing or malformed."""
