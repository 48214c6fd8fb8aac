class EssencePouchError(Exception):
    """Base error for essence pouch tracking."""


class InvalidPouchKind(EssencePouchError, ValueError):
    """Raised when pouch catalog data violates its capacity/decay bounds."""


class ConfigError(EssencePouchError):
    """Raised for unknown or malformed tracker configuration toggles."""
