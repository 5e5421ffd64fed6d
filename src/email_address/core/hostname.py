"""Hostname value object shared by every address grammar.

Only the local part differs between the transport, header and
international grammars; the domain always follows the RFC 1123 hostname
rules below, so a ``Domain`` validated once is valid under all of them.

Rules
-----
- one or more labels joined by ``.``
- each label matches ``[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?``
- each label is at most 63 characters
- the whole name is at most 253 characters
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidLabel, InvalidLength

MAX_LABEL_LENGTH = 63
MAX_DOMAIN_LENGTH = 253

_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?", re.ASCII)


@dataclass(frozen=True)
class Domain:
    """A validated hostname.

    Build with :meth:`parse` for untrusted text, or :meth:`from_validated`
    when the text already passed hostname validation elsewhere.
    """

    name: str

    @classmethod
    def parse(cls, text: str) -> Domain:
        """Validate *text* as a hostname.

        Raises:
            InvalidLength: total length over 253.
            InvalidLabel: empty text, empty label, label over 63 characters
                or a character outside the label grammar.
        """
        if not text:
            raise InvalidLabel(text, "domain is empty")
        if len(text) > MAX_DOMAIN_LENGTH:
            raise InvalidLength(len(text), MAX_DOMAIN_LENGTH)

        for label in text.split("."):
            if not label:
                raise InvalidLabel(label, "empty label")
            if len(label) > MAX_LABEL_LENGTH:
                raise InvalidLabel(
                    label, f"label exceeds {MAX_LABEL_LENGTH} characters"
                )
            if _LABEL_RE.fullmatch(label) is None:
                if label[0] == "-" or label[-1] == "-":
                    raise InvalidLabel(label, "label starts or ends with '-'")
                raise InvalidLabel(label, "disallowed character")

        return cls(text)

    @classmethod
    def from_validated(cls, other: Domain | str) -> Domain:
        """Re-wrap a hostname that is already known to be valid."""
        if isinstance(other, Domain):
            return other
        return cls(other)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self.name.split("."))

    @property
    def normalized(self) -> str:
        """Lower-cased form; hostnames compare case-insensitively."""
        return self.name.lower()

    def __str__(self) -> str:
        return self.name
