"""Grammar engine: parse, build, serialize and re-wrap addresses.

One ``GrammarEngine`` class serves all four grammars; the behaviour that
differs lives in its ``GrammarPolicy``. Use :func:`engine_for` to get the
shared instance for a grammar.
"""

from __future__ import annotations

from dataclasses import replace

from email_address.core.enums import Grammar
from email_address.core.errors import (
    InvalidFormat,
    InvalidLocalPart,
    MalformedAddress,
)
from email_address.core.hostname import Domain

from .models import AddrSpec, LocalPart
from .policy import POLICIES, GrammarPolicy
from .tokenizer import AddressTokenizer


def _octets(text: str) -> int:
    return len(text.encode("utf-8"))


class GrammarEngine:
    """Parser and serializer for one address grammar."""

    def __init__(self, policy: GrammarPolicy) -> None:
        self.policy = policy

    @property
    def grammar(self) -> Grammar:
        return self.policy.grammar

    def __repr__(self) -> str:
        return f"GrammarEngine({self.grammar.name})"

    # ------------------------------------------------------------------
    # Validating constructors
    # ------------------------------------------------------------------

    def parse(self, text: str) -> AddrSpec:
        """Parse ``[display-name] [<] local-part @ domain [>]``.

        Raises:
            MalformedAddress: empty input, missing '@', empty local part,
                unbalanced angle brackets or over-long address.
            InvalidLocalPart: local part outside this grammar.
            InvalidDomain: hostname validation failed.
        """
        tokens = AddressTokenizer(self.policy, text).tokenize()
        spec = AddrSpec(
            grammar=self.grammar,
            local_part=LocalPart(tokens.local_part, tokens.form),
            domain=tokens.domain,
            display_name=tokens.display_name,
        )
        self._check_limits(spec)
        return spec

    def build(
        self,
        local_part: LocalPart | str,
        domain: Domain,
        display_name: str | None = None,
    ) -> AddrSpec:
        """Assemble an address from components, re-validating the local part.

        The domain is trusted: a ``Domain`` is valid under every grammar.
        """
        tokenizer = AddressTokenizer(self.policy, str(local_part))
        spec = AddrSpec(
            grammar=self.grammar,
            local_part=tokenizer.tokenize_local_part(),
            domain=domain,
            display_name=display_name,
        )
        self._check_limits(spec)
        return spec

    def _check_limits(self, spec: AddrSpec) -> None:
        limit = self.policy.max_local_length
        if limit is not None and _octets(spec.local_part.text) > limit:
            raise InvalidLocalPart(f"local part exceeds {limit} octets")

        limit = self.policy.max_address_length
        if limit is not None and _octets(spec.address) > limit:
            raise MalformedAddress(f"address exceeds {limit} octets")

    # ------------------------------------------------------------------
    # Trusted re-wrap
    # ------------------------------------------------------------------

    def rewrap(self, spec: AddrSpec) -> AddrSpec:
        """Re-tag *spec* for this grammar without validation.

        Only for values already valid under a grammar whose addr-spec this
        grammar accepts in full; see ``lattice``.
        """
        if spec.grammar is self.grammar:
            return spec
        return replace(spec, grammar=self.grammar)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def serialize(self, spec: AddrSpec) -> str:
        if spec.grammar is not self.grammar:
            raise InvalidFormat(
                f"{spec.grammar.value} address given to {self.grammar.value} engine"
            )
        return spec.to_text()


_ENGINES: dict[Grammar, GrammarEngine] = {
    grammar: GrammarEngine(policy) for grammar, policy in POLICIES.items()
}


def engine_for(grammar: Grammar) -> GrammarEngine:
    return _ENGINES[grammar]
