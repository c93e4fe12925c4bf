"""Exception types raised outside the lookup path."""

from __future__ import annotations


class PSLError(Exception):
    """Base class for every error raised by psl_engine."""


class ParseError(PSLError):
    """A rule list could not be compiled. The build produced no table."""

    def __init__(self, message: str, line: str = "", lineno: int = 0) -> None:
        super().__init__(message)
        self.line = line
        self.lineno = lineno


class InvalidDomainError(PSLError, ValueError):
    """A registrable domain cannot be derived from the given domain."""


class RetrievalError(PSLError):
    """The rule-list source failed to supply a release tag or list."""


class PersistenceError(PSLError):
    """A persisted rule table could not be decoded."""
