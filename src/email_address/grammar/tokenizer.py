"""Single-pass address tokenizer shared by every grammar engine.

State flow::

    START -> [DISPLAY_NAME | DISPLAY_QUOTED] -> EXPECT_LOCAL
          -> LOCAL_ATOM | LOCAL_QUOTED -> EXPECT_AT -> EXPECT_DOMAIN
          -> [ANGLE_CLOSE] -> DONE

The only lookahead is locating the ``<`` that opens an angle-addr, which
decides whether leading text is a display name. Every state consumes
input left to right and there is no backtracking. The first violation
raises. Whitespace is skipped only directly inside the angle brackets.

Positions reported in ``InvalidLocalPart`` are offsets into the trimmed
input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from email_address.core.enums import LocalPartForm
from email_address.core.errors import (
    DomainError,
    InvalidDomain,
    InvalidLocalPart,
    MalformedAddress,
)
from email_address.core.hostname import Domain

from .models import LocalPart
from .policy import GrammarPolicy


class ParseState(Enum):
    START = auto()
    DISPLAY_NAME = auto()
    DISPLAY_QUOTED = auto()
    EXPECT_LOCAL = auto()
    LOCAL_ATOM = auto()
    LOCAL_QUOTED = auto()
    EXPECT_AT = auto()
    EXPECT_DOMAIN = auto()
    ANGLE_CLOSE = auto()
    DONE = auto()


@dataclass(frozen=True)
class Tokens:
    local_part: str
    form: LocalPartForm
    domain: Domain
    display_name: str | None = None


def find_angle_open(text: str) -> int | None:
    """Index of the first ``<`` outside a quoted string, if any."""
    in_quotes = False
    escaped = False
    for i, ch in enumerate(text):
        if escaped:
            escaped = False
        elif in_quotes:
            if ch == "\\":
                escaped = True
            elif ch == '"':
                in_quotes = False
        elif ch == '"':
            in_quotes = True
        elif ch == "<":
            return i
    return None


class AddressTokenizer:
    """Runs the state machine over one input under one policy.

    Instances are single-use; call :meth:`tokenize` for full address text
    or :meth:`tokenize_local_part` for a bare local part.
    """

    def __init__(self, policy: GrammarPolicy, text: str) -> None:
        self.policy = policy
        self.text = text
        self.pos = 0
        self.state = ParseState.START
        self._local_only = False
        self._angle = False
        self._name_end = 0  # index of the '<' ending a display name
        self._local_start = 0
        self._local_end = 0
        self._form = LocalPartForm.DOT_ATOM
        self._domain: Domain | None = None
        self._display_name: str | None = None
        self._handlers: dict[ParseState, Callable[[], None]] = {
            ParseState.START: self._start,
            ParseState.DISPLAY_NAME: self._display_name_raw,
            ParseState.DISPLAY_QUOTED: self._display_name_quoted,
            ParseState.EXPECT_LOCAL: self._expect_local,
            ParseState.LOCAL_ATOM: self._local_atom,
            ParseState.LOCAL_QUOTED: self._local_quoted,
            ParseState.EXPECT_AT: self._expect_at,
            ParseState.EXPECT_DOMAIN: self._expect_domain,
            ParseState.ANGLE_CLOSE: self._angle_close,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def tokenize(self) -> Tokens:
        self.text = self.text.strip()
        self._run()
        if self._domain is None:
            raise MalformedAddress("missing domain")
        return Tokens(
            local_part=self.text[self._local_start:self._local_end],
            form=self._form,
            domain=self._domain,
            display_name=self._display_name,
        )

    def tokenize_local_part(self) -> LocalPart:
        """Validate text that must consist of exactly one local part."""
        self._local_only = True
        self.state = ParseState.EXPECT_LOCAL
        self._run()
        return LocalPart(self.text, self._form)

    def _run(self) -> None:
        while self.state is not ParseState.DONE:
            self._handlers[self.state]()

    # ------------------------------------------------------------------
    # Display name
    # ------------------------------------------------------------------

    def _start(self) -> None:
        if not self.text:
            raise MalformedAddress("address is empty")

        angle_at = find_angle_open(self.text)
        if angle_at is None:
            self.state = ParseState.EXPECT_LOCAL
            return

        self._name_end = angle_at
        if angle_at == 0:
            self._open_angle()
        elif self.text[0] == '"':
            self.pos = 1
            self.state = ParseState.DISPLAY_QUOTED
        else:
            self.state = ParseState.DISPLAY_NAME

    def _open_angle(self) -> None:
        self._angle = True
        self.pos = self._name_end + 1
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1
        self.state = ParseState.EXPECT_LOCAL

    def _display_name_raw(self) -> None:
        name = self.text[:self._name_end].strip()
        if ">" in name:
            raise MalformedAddress("unbalanced '>' in display name")
        self._display_name = name or None
        self._open_angle()

    def _display_name_quoted(self) -> None:
        chars: list[str] = []
        escaped = False
        # find_angle_open guarantees the quote closes before the '<'.
        while self.pos < self._name_end:
            ch = self.text[self.pos]
            self.pos += 1
            if escaped:
                chars.append(ch)
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                break
            else:
                chars.append(ch)

        trailing = self.text[self.pos:self._name_end]
        if trailing.strip():
            raise MalformedAddress(
                f"unexpected text {trailing.strip()!r} after quoted display name"
            )
        self._display_name = "".join(chars) or None
        self._open_angle()

    # ------------------------------------------------------------------
    # Local part
    # ------------------------------------------------------------------

    def _expect_local(self) -> None:
        if self.pos >= len(self.text) or self.text[self.pos] == "@":
            raise MalformedAddress("local part is empty")
        if self._angle and self.text[self.pos] == ">":
            raise MalformedAddress("local part is empty")

        self._local_start = self.pos
        if self.text[self.pos] == '"':
            self._form = LocalPartForm.QUOTED
            self.pos += 1
            self.state = ParseState.LOCAL_QUOTED
        else:
            self._form = LocalPartForm.DOT_ATOM
            self.state = ParseState.LOCAL_ATOM

    def _local_atom(self) -> None:
        text = self.text
        segment_start = True
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "@" or (self._angle and ch == ">"):
                break
            if ch == ".":
                if self.pos == self._local_start:
                    raise InvalidLocalPart("leading dot", self.pos)
                if segment_start:
                    raise InvalidLocalPart("consecutive dots", self.pos)
                segment_start = True
            elif self.policy.is_atext(ch):
                segment_start = False
            else:
                raise InvalidLocalPart(f"character {ch!r} not allowed", self.pos)
            self.pos += 1

        if segment_start:
            raise InvalidLocalPart("trailing dot", self.pos - 1)
        self._local_end = self.pos
        self.state = ParseState.EXPECT_AT

    def _local_quoted(self) -> None:
        text = self.text
        escaped = False
        while self.pos < len(text):
            ch = text[self.pos]
            if escaped:
                if not self.policy.is_quotable(ch):
                    raise InvalidLocalPart(
                        f"character {ch!r} cannot be escaped", self.pos
                    )
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                self.pos += 1
                self._local_end = self.pos
                self.state = ParseState.EXPECT_AT
                return
            elif not self.policy.is_qtext(ch):
                raise InvalidLocalPart(
                    f"character {ch!r} not allowed in quoted string", self.pos
                )
            self.pos += 1

        raise InvalidLocalPart("unterminated quoted string", self._local_start)

    def _expect_at(self) -> None:
        if self._local_only:
            if self.pos < len(self.text):
                raise InvalidLocalPart(
                    f"unexpected character {self.text[self.pos]!r}", self.pos
                )
            self.state = ParseState.DONE
            return

        if self.pos >= len(self.text):
            raise MalformedAddress("missing '@'")
        ch = self.text[self.pos]
        if self._angle and ch == ">":
            raise MalformedAddress("missing '@'")
        if ch != "@":
            raise InvalidLocalPart(
                f"unexpected character {ch!r} after local part", self.pos
            )
        self.pos += 1
        self.state = ParseState.EXPECT_DOMAIN

    # ------------------------------------------------------------------
    # Domain
    # ------------------------------------------------------------------

    def _expect_domain(self) -> None:
        rest = self.text[self.pos:]
        close = rest.find(">")
        if self._angle:
            if close == -1:
                raise MalformedAddress("unclosed '<'")
            domain_text = rest[:close].rstrip()
            self.pos += close
            self.state = ParseState.ANGLE_CLOSE
        else:
            if close != -1:
                raise MalformedAddress("unbalanced '>'")
            domain_text = rest
            self.pos = len(self.text)
            self.state = ParseState.DONE

        try:
            self._domain = Domain.parse(domain_text)
        except DomainError as exc:
            raise InvalidDomain(exc) from exc

    def _angle_close(self) -> None:
        if self.pos != len(self.text) - 1:
            raise MalformedAddress("unexpected text after '>'")
        self.pos += 1
        self.state = ParseState.DONE
