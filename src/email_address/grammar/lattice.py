"""Conversion rules between address grammars.

Permissiveness order::

    TRANSPORT  ⊂  LEGACY == HEADER  ⊂  INTERNATIONAL

A conversion is either *trusted* (the target grammar accepts every value
of the source grammar, so the address is re-tagged as-is) or *checked* (the
target engine re-validates the components). Checked conversions into an
ASCII grammar are gated on ``is_ascii`` first.
"""

from __future__ import annotations

import logging

from email_address.core.enums import Grammar
from email_address.core.errors import ConversionFailure, ParseError

from .engine import engine_for
from .models import AddrSpec

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Trusted conversions (source -> targets that accept it unchanged)
# ---------------------------------------------------------------------------

_TRUSTED: dict[Grammar, frozenset[Grammar]] = {
    Grammar.TRANSPORT: frozenset(
        {Grammar.LEGACY, Grammar.HEADER, Grammar.INTERNATIONAL}
    ),
    Grammar.LEGACY: frozenset({Grammar.HEADER, Grammar.INTERNATIONAL}),
    Grammar.HEADER: frozenset({Grammar.LEGACY, Grammar.INTERNATIONAL}),
    # Everything out of INTERNATIONAL is checked.
    Grammar.INTERNATIONAL: frozenset(),
}


def is_trusted(source: Grammar, target: Grammar) -> bool:
    return source is target or target in _TRUSTED[source]


def convert(spec: AddrSpec, target: Grammar) -> AddrSpec:
    """Re-express *spec* under *target*.

    Raises:
        ConversionFailure: *spec* has no representation in *target*.
    """
    engine = engine_for(target)
    if is_trusted(spec.grammar, target):
        return engine.rewrap(spec)

    if target.is_ascii and not spec.is_ascii:
        logger.debug(
            "No %s representation for %s: non-ASCII local part",
            target.value,
            spec.address,
        )
        raise ConversionFailure(
            spec.grammar, target, "address contains non-ASCII characters"
        )

    try:
        return engine.build(spec.local_part, spec.domain, spec.display_name)
    except ParseError as exc:
        logger.debug(
            "No %s representation for %s: %s", target.value, spec.address, exc
        )
        raise ConversionFailure(spec.grammar, target, str(exc)) from exc


def try_convert(spec: AddrSpec, target: Grammar) -> AddrSpec | None:
    """Like :func:`convert`, but an impossible conversion yields ``None``."""
    try:
        return convert(spec, target)
    except ConversionFailure:
        return None
