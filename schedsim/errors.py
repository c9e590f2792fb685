from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the simulation engine."""


class ValidationError(SchedulerError, ValueError):
    """A process attribute is invalid (non-positive burst, negative arrival, ...)."""


class ConfigurationError(SchedulerError, ValueError):
    """An algorithm or its parameters are missing or invalid."""


class EmptyInputError(SchedulerError, ValueError):
    """A simulation was requested with no processes."""
