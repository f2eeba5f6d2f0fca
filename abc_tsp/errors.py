class AbcError(Exception):
    """Base class for every fatal error raised by abc_tsp."""


class InputError(AbcError, ValueError):
    """Malformed city data: unreadable file, non-numeric cells, ragged rows."""


class DimensionMismatch(InputError):
    pass


class ConfigError(AbcError, ValueError):
    """Out-of-range or unparsable configuration value."""


class InvariantViolation(AbcError, RuntimeError):
    """Impossible internal state. Indicates a defect, never retried."""
