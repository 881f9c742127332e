# errors.py
"""Exception types shared by every layer."""


class DictermError(Exception):
    """Base class for errors reported to the host."""


class LoadError(DictermError):
    """A dictionary source is malformed (missing word / definition)."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
