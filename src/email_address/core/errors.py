"""Custom exception hierarchy for email address parsing and conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import Grammar


class EmailAddressError(Exception):
    """Base exception for all email address errors."""


# --- Domain ---
class DomainError(EmailAddressError):
    """Hostname grammar violation."""


class InvalidLabel(DomainError):
    """A label is empty, too long, or contains a disallowed character."""

    def __init__(self, label: str, reason: str):
        self.label = label
        self.reason = reason
        super().__init__(f"Invalid domain label {label!r}: {reason}")


class InvalidLength(DomainError):
    """The domain exceeds the 253 character hostname limit."""

    def __init__(self, length: int, limit: int = 253):
        self.length = length
        self.limit = limit
        super().__init__(f"Domain is {length} characters long (limit {limit})")


# --- Parsing ---
class ParseError(EmailAddressError):
    """Address text rejected by a grammar engine."""


class MalformedAddress(ParseError):
    """Missing '@', unbalanced angle brackets, or empty input."""


class InvalidLocalPart(ParseError):
    """Local part violates the grammar's character classes or dot rules."""

    def __init__(self, reason: str, position: int | None = None):
        self.reason = reason
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Invalid local part{where}: {reason}")


class InvalidDomain(ParseError):
    """Domain part failed hostname validation."""

    def __init__(self, cause: DomainError):
        self.cause = cause
        super().__init__(f"Invalid domain: {cause}")


# --- Conversion ---
class ConversionFailure(EmailAddressError):
    """A valid address cannot be re-expressed in the target grammar."""

    def __init__(self, source: Grammar, target: Grammar, reason: str):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(
            f"Cannot convert {source.value} address to {target.value}: {reason}"
        )


class InvalidFormat(EmailAddressError):
    """Caller-supplied constraint not satisfied (e.g. ASCII-only)."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"Invalid email format: {description}")
