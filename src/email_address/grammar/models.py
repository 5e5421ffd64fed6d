"""Parsed address values shared by all grammar engines.

These are immutable: conversions and display-name overrides produce new
instances via ``dataclasses.replace``.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, replace

from email_address.core.enums import Grammar, LocalPartForm
from email_address.core.hostname import Domain

# RFC 5322 specials that force a display name into a quoted-string.
_DISPLAY_SPECIALS = frozenset('()<>[]:;@\\,"')


def _is_control(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc"


def display_name_needs_quoting(name: str) -> bool:
    if not name or name != name.strip():
        return True
    return any(ch in _DISPLAY_SPECIALS or _is_control(ch) for ch in name)


def quote_display_name(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_display_name(name: str) -> str:
    if display_name_needs_quoting(name):
        return quote_display_name(name)
    return name


@dataclass(frozen=True)
class LocalPart:
    """Local part text exactly as written, quotes and escapes included."""

    text: str
    form: LocalPartForm = LocalPartForm.DOT_ATOM

    @property
    def is_ascii(self) -> bool:
        return self.text.isascii()

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class AddrSpec:
    """``(display-name?, local-part, domain)`` valid under ``grammar``.

    Construct through a grammar engine (``parse`` / ``build``) rather than
    directly; the dataclass constructor performs no validation.
    """

    grammar: Grammar
    local_part: LocalPart
    domain: Domain
    display_name: str | None = None

    @property
    def address(self) -> str:
        """``local@domain`` without display name or angle brackets."""
        return f"{self.local_part.text}@{self.domain.name}"

    @property
    def is_ascii(self) -> bool:
        return self.local_part.is_ascii and self.domain.name.isascii()

    def with_display_name(self, display_name: str | None) -> AddrSpec:
        return replace(self, display_name=display_name)

    def to_text(self) -> str:
        if self.display_name is None:
            return self.address
        return f"{format_display_name(self.display_name)} <{self.address}>"

    def __str__(self) -> str:
        return self.to_text()
