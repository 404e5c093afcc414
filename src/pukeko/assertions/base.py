"""Base data structures for the assertion system."""

from __future__ import annotations


class TestFailure(Exception):
    """Raised when a pukeko assertion does not hold.

    The runner uses this type to tell a failing test apart from an
    unexpected error inside a test function.

    Attributes:
        message: Human-readable description of why the test failed.
    """

    __test__ = False

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message

    @property
    def message(self) -> str:
        return self._message

    def __str__(self) -> str:
        return self._message
