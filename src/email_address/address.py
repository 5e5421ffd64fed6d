"""Canonical email address type.

An ``EmailAddress`` stores a single RFC 6531 (international) ``AddrSpec``.
The transport, header and legacy views are computed from it on access and
are ``None`` when the address cannot be expressed in that grammar, e.g. a
non-ASCII local part has no RFC 5321 form.

Text output always uses the most restrictive grammar available, in the
order given by ``PREFERENCE`` (transport, header, international).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from email_address.core.enums import PREFERENCE, Grammar
from email_address.core.errors import (
    DomainError,
    EmailAddressError,
    InvalidDomain,
    InvalidFormat,
)
from email_address.core.hostname import Domain
from email_address.grammar import AddrSpec, convert, engine_for, try_convert


@dataclass(frozen=True, repr=False)
class EmailAddress:
    """An email address valid under RFC 6531, viewable under stricter RFCs.

    ``EmailAddress(spec)`` accepts an ``AddrSpec`` of any grammar and
    converts it upward; every other constructor goes through :meth:`parse`.
    Equality and hashing cover the canonical value, display name included.
    """

    canonical: AddrSpec

    # Permissive pre-screen, not an RFC grammar.
    SIMPLE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?!.*\.\.)[A-Za-z0-9](?:[A-Za-z0-9._%+-]{0,62}[A-Za-z0-9])?"
        r"@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"
    )

    def __post_init__(self) -> None:
        if self.canonical.grammar is not Grammar.INTERNATIONAL:
            object.__setattr__(
                self, "canonical", convert(self.canonical, Grammar.INTERNATIONAL)
            )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, display_name: str | None = None) -> EmailAddress:
        """Parse *text* under RFC 6531.

        Args:
            text: Address text, optionally with display name and angle
                brackets.
            display_name: Replaces any display name found in *text*. An
                empty string counts as no display name.
        """
        spec = engine_for(Grammar.INTERNATIONAL).parse(text)
        if display_name is not None:
            spec = spec.with_display_name(display_name or None)
        return cls(spec)

    @classmethod
    def from_components(
        cls,
        local_part: str,
        domain: str,
        display_name: str | None = None,
    ) -> EmailAddress:
        """Validate each component separately, then assemble.

        Raises:
            InvalidLocalPart / MalformedAddress: *local_part* is not exactly
                one RFC 6531 local part.
            InvalidDomain: *domain* is not a valid hostname.
        """
        try:
            host = Domain.parse(domain)
        except DomainError as exc:
            raise InvalidDomain(exc) from exc
        spec = engine_for(Grammar.INTERNATIONAL).build(
            local_part, host, display_name or None
        )
        return cls(spec)

    @classmethod
    def ascii(cls, text: str, display_name: str | None = None) -> EmailAddress:
        """Parse *text*, rejecting internationalized addresses."""
        email = cls.parse(text, display_name=display_name)
        if not email.is_ascii:
            raise InvalidFormat("Must be ASCII-only")
        return email

    @classmethod
    def from_raw(cls, raw_value: str) -> EmailAddress | None:
        """Non-raising counterpart of :meth:`parse`."""
        try:
            return cls.parse(raw_value)
        except EmailAddressError:
            return None

    @classmethod
    def looks_valid(cls, text: str) -> bool:
        """Quick check against :attr:`SIMPLE_PATTERN`; not a full parse."""
        return cls.SIMPLE_PATTERN.match(text) is not None

    # ------------------------------------------------------------------
    # Grammar views
    # ------------------------------------------------------------------

    def view(self, grammar: Grammar) -> AddrSpec | None:
        return try_convert(self.canonical, grammar)

    @property
    def transport(self) -> AddrSpec | None:
        """RFC 5321 view."""
        return self.view(Grammar.TRANSPORT)

    @property
    def header(self) -> AddrSpec | None:
        """RFC 5322 view."""
        return self.view(Grammar.HEADER)

    @property
    def legacy(self) -> AddrSpec | None:
        """RFC 2822 view."""
        return self.view(Grammar.LEGACY)

    @property
    def international(self) -> AddrSpec:
        """RFC 6531 view; always available."""
        return self.canonical

    def best_view(self) -> AddrSpec:
        """First available view in ``PREFERENCE`` order."""
        for grammar in PREFERENCE:
            spec = self.view(grammar)
            if spec is not None:
                return spec
        return self.canonical

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def display_name(self) -> str | None:
        return self.canonical.display_name

    @property
    def name(self) -> str | None:
        return self.display_name

    @property
    def address(self) -> str:
        """``local@domain`` without display name."""
        return self.best_view().address

    @property
    def local_part(self) -> str:
        return self.best_view().local_part.text

    @property
    def domain(self) -> Domain:
        return self.canonical.domain

    @property
    def domain_text(self) -> str:
        return self.domain.normalized

    @property
    def is_ascii(self) -> bool:
        return self.canonical.is_ascii

    @property
    def is_internationalized(self) -> bool:
        return not self.is_ascii

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def normalized(self) -> EmailAddress:
        """Re-express using the most restrictive grammar available."""
        if self.is_internationalized:
            return self
        return EmailAddress(self.best_view())

    def matches(self, other: EmailAddress) -> bool:
        """Case-insensitive address comparison, display names ignored.

        Compares under the most restrictive grammar both addresses share.
        """
        for grammar in PREFERENCE:
            mine, theirs = self.view(grammar), other.view(grammar)
            if mine is not None and theirs is not None:
                return mine.address.lower() == theirs.address.lower()
        return self.canonical.address.lower() == other.canonical.address.lower()

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def to_text(self) -> str:
        return self.best_view().to_text()

    @property
    def raw_value(self) -> str:
        return self.to_text()

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"EmailAddress({self.to_text()!r})"

    # ------------------------------------------------------------------
    # Pydantic integration: persisted as the single ``to_text`` string
    # ------------------------------------------------------------------

    @classmethod
    def _from_text(cls, value: str) -> EmailAddress:
        try:
            return cls.parse(value)
        except EmailAddressError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_text = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls._from_text),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_text,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_text]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_text()
            ),
        )
