"""Address grammars: RFC 5321, RFC 2822, RFC 5322 and RFC 6531.

Public API
----------
Models:
    AddrSpec, LocalPart

Engines:
    GrammarEngine, GrammarPolicy, engine_for

Conversion:
    convert, try_convert, is_trusted
"""

from email_address.grammar.engine import GrammarEngine, engine_for
from email_address.grammar.lattice import convert, is_trusted, try_convert
from email_address.grammar.models import AddrSpec, LocalPart
from email_address.grammar.policy import POLICIES, GrammarPolicy

__all__ = [
    "AddrSpec",
    "LocalPart",
    "GrammarEngine",
    "GrammarPolicy",
    "POLICIES",
    "engine_for",
    "convert",
    "try_convert",
    "is_trusted",
]
