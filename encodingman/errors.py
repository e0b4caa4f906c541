# encodingman/errors.py

from __future__ import annotations


class EncodingmanError(Exception):
    """Base class for every error raised by the conversion core."""


class NotFound(EncodingmanError):
    """The input path does not exist."""


class IoError(EncodingmanError):
    """Reading an input file failed."""


class UnknownEncoding(EncodingmanError):
    """The encoding name does not resolve to a supported candidate."""

    def __init__(self, name: str | None) -> None:
        super().__init__(f"Unknown encoding: {name}")
        self.name = name


class DecodeFailure(EncodingmanError):
    """Strict decoding hit an unmappable byte sequence."""


class ConfigError(EncodingmanError):
    """A configuration value is missing, malformed or out of range."""


def describe(exc: BaseException) -> str:
    """Render an exception the way outcomes and reports show it."""
    return f"{type(exc).__name__}: {exc}"
