"""Errors raised by the spin engine."""


class InvalidConfiguration(ValueError):
    """Segments or physics settings that cannot produce a valid spin."""


class AlreadySpinning(RuntimeError):
    """start() was called while a spin is still in flight."""
