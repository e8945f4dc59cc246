"""Exceptions raised while loading and checking a game description."""

from __future__ import annotations


class CubError(Exception):
    """Base class for every error the game reports.

    ``line`` is the line of the configuration file the error belongs to,
    or ``None`` when the error is not tied to a line.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} : line {self.line}"


class ConfigError(CubError):
    """The configuration file is malformed or incomplete."""


class MapError(CubError):
    """The map is malformed, has a bad player count or is not closed."""


class TextureError(CubError):
    """A texture could not be read or decoded."""