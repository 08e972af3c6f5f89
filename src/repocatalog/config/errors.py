"""Errors raised while reading catalog settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """Raised when a setting is invalid.

    ``setting`` names the environment variable at fault, when there is one.
    """

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are absent or blank."""

    def __init__(self, settings: Iterable[str]) -> None:
        self.settings = tuple(sorted(settings))
        super().__init__(f"Missing configuration for: {', '.join(self.settings)}")
