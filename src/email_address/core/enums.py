"""Enumerations used across the email address package."""

from enum import Enum


class Grammar(str, Enum):
    TRANSPORT = "rfc5321"  # SMTP mailbox
    LEGACY = "rfc2822"  # Obsoleted message format, addr-spec == HEADER
    HEADER = "rfc5322"  # Internet message format
    INTERNATIONAL = "rfc6531"  # SMTPUTF8

    @property
    def is_ascii(self) -> bool:
        return self is not Grammar.INTERNATIONAL


class LocalPartForm(str, Enum):
    DOT_ATOM = "dot_atom"
    QUOTED = "quoted"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


# Most restrictive first. LEGACY is reachable as a view but never preferred.
PREFERENCE: tuple[Grammar, ...] = (
    Grammar.TRANSPORT,
    Grammar.HEADER,
    Grammar.INTERNATIONAL,
)
