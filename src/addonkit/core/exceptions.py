from __future__ import annotations

from typing import Any, Dict, Mapping


class AddonkitError(Exception):
    """Base exception for addonkit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(AddonkitError, ValueError):
    """Raised when addonkit configuration is malformed or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        AddonkitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ResolutionError(AddonkitError, ValueError):
    """Raised when an addon entry cannot be interpreted at all.

    An addon that simply cannot be found is not an error: resolvers return
    ``None`` for that case.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        AddonkitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class PresetLoadError(AddonkitError):
    """Raised when a preset module cannot be loaded."""


class InvalidPresetError(PresetLoadError, TypeError):
    """Raised when loaded preset contents are not a function, list, or mapping."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PresetLoadError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


__all__ = [
    "AddonkitError",
    "ConfigError",
    "ResolutionError",
    "PresetLoadError",
    "InvalidPresetError",
]
