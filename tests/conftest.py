"""Shared fixtures for the email-address test suite."""

from __future__ import annotations

import pytest

from email_address.address import EmailAddress
from email_address.core.enums import Grammar
from email_address.core.hostname import Domain
from email_address.grammar import GrammarEngine, engine_for


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------

@pytest.fixture
def transport() -> GrammarEngine:
    """RFC 5321 engine."""
    return engine_for(Grammar.TRANSPORT)


@pytest.fixture
def header() -> GrammarEngine:
    """RFC 5322 engine."""
    return engine_for(Grammar.HEADER)


@pytest.fixture
def legacy() -> GrammarEngine:
    """RFC 2822 engine."""
    return engine_for(Grammar.LEGACY)


@pytest.fixture
def international() -> GrammarEngine:
    """RFC 6531 engine."""
    return engine_for(Grammar.INTERNATIONAL)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

@pytest.fixture
def example_domain() -> Domain:
    return Domain.parse("example.com")


@pytest.fixture
def john() -> EmailAddress:
    return EmailAddress.parse("john.doe@example.com")


@pytest.fixture
def named_john() -> EmailAddress:
    return EmailAddress.parse("John Doe <john.doe@example.com>")


@pytest.fixture
def international_user() -> EmailAddress:
    return EmailAddress.parse("用户@example.com")
