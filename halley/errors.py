"""Exceptions raised by the Halley fractal engine."""

from __future__ import annotations


class InvalidRequestError(ValueError):
    """A render request was rejected before any pixel work started."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
