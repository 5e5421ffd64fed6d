"""Per-grammar character classes and limits.

Every grammar engine runs the same tokenizer; what differs between the
transport, legacy, header and international grammars is captured here:

=============  =====  ========================  ===========  =============
Grammar        UTF-8  Whitespace in quotes       Local limit  Address limit
=============  =====  ========================  ===========  =============
transport      no     SP                         64 octets    254 octets
legacy         no     SP, HTAB                   --           --
header         no     SP, HTAB                   --           --
international  yes    SP, HTAB                   --           --
=============  =====  ========================  ===========  =============

``legacy`` and ``header`` are the same policy under different tags: the
RFC 2822 and RFC 5322 addr-spec productions are identical.
"""

from __future__ import annotations

from dataclasses import dataclass

from email_address.core.enums import Grammar

# atext = ALPHA / DIGIT / these
ATEXT_SPECIALS = frozenset("!#$%&'*+-/=?^_`{|}~")

SP = " "
HTAB = "\t"


def _is_utf8_text(ch: str) -> bool:
    """UTF8-non-ascii code point usable in a local part."""
    return ord(ch) > 0x7F and ch.isprintable()


def _is_vchar(ch: str) -> bool:
    return 0x21 <= ord(ch) <= 0x7E


@dataclass(frozen=True)
class GrammarPolicy:
    grammar: Grammar
    allow_utf8: bool = False
    quoted_whitespace: frozenset[str] = frozenset({SP, HTAB})
    max_local_length: int | None = None  # octets
    max_address_length: int | None = None  # octets, local@domain

    def is_atext(self, ch: str) -> bool:
        """Character allowed unquoted in a dot-atom segment."""
        if ch.isascii():
            return ch.isalnum() or ch in ATEXT_SPECIALS
        return self.allow_utf8 and _is_utf8_text(ch)

    def is_qtext(self, ch: str) -> bool:
        """Character allowed unescaped between double quotes."""
        if ch.isascii():
            if ch in self.quoted_whitespace:
                return True
            return _is_vchar(ch) and ch not in '"\\'
        return self.allow_utf8 and _is_utf8_text(ch)

    def is_quotable(self, ch: str) -> bool:
        """Character allowed after a backslash in a quoted string."""
        if ch.isascii():
            return ch in self.quoted_whitespace or _is_vchar(ch)
        return self.allow_utf8 and _is_utf8_text(ch)


TRANSPORT_POLICY = GrammarPolicy(
    grammar=Grammar.TRANSPORT,
    quoted_whitespace=frozenset({SP}),
    max_local_length=64,
    max_address_length=254,
)
LEGACY_POLICY = GrammarPolicy(grammar=Grammar.LEGACY)
HEADER_POLICY = GrammarPolicy(grammar=Grammar.HEADER)
INTERNATIONAL_POLICY = GrammarPolicy(
    grammar=Grammar.INTERNATIONAL,
    allow_utf8=True,
)

POLICIES: dict[Grammar, GrammarPolicy] = {
    Grammar.TRANSPORT: TRANSPORT_POLICY,
    Grammar.LEGACY: LEGACY_POLICY,
    Grammar.HEADER: HEADER_POLICY,
    Grammar.INTERNATIONAL: INTERNATIONAL_POLICY,
}
