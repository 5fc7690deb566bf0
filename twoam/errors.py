"""
Error taxonomy for chime scheduling.

Suppression (mute window, empty channel) is not an error: it is reported
as a DEFER decision.
"""


class ChimeError(Exception):
    """Base class for all chime errors."""


class ConfigurationError(ChimeError):
    """Tenant has no destination configured. Never retried."""


class NotFoundError(ChimeError):
    """Tenant guild or destination channel no longer exists."""


class DeliveryError(ChimeError):
    """Joining, playing or leaving the destination failed."""


class RepositoryError(ChimeError):
    """Reading or writing tenant records failed."""


class InvalidMuteSpecError(ChimeError, ValueError):
    """Mute argument could not be turned into a future timestamp."""
