from __future__ import annotations


class SwirlError(Exception):
    """Base class for tiledswirl errors."""


class InvalidConfiguration(SwirlError, ValueError):
    pass


class MissingSurface(SwirlError, RuntimeError):
    pass
