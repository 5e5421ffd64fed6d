"""Test the exception hierarchy and messages."""

import pytest

from email_address.core.enums import Grammar
from email_address.core.errors import (
    ConversionFailure,
    DomainError,
    EmailAddressError,
    InvalidDomain,
    InvalidFormat,
    InvalidLabel,
    InvalidLength,
    InvalidLocalPart,
    MalformedAddress,
    ParseError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type, parent",
        [
            (InvalidLabel, DomainError),
            (InvalidLength, DomainError),
            (MalformedAddress, ParseError),
            (InvalidLocalPart, ParseError),
            (InvalidDomain, ParseError),
            (DomainError, EmailAddressError),
            (ParseError, EmailAddressError),
            (ConversionFailure, EmailAddressError),
            (InvalidFormat, EmailAddressError),
        ],
    )
    def test_subclass(self, exc_type, parent):
        assert issubclass(exc_type, parent)

    def test_domain_error_is_not_parse_error(self):
        assert not issubclass(DomainError, ParseError)


class TestMessages:
    def test_invalid_label(self):
        exc = InvalidLabel("-bad", "label starts or ends with '-'")
        assert exc.label == "-bad"
        assert str(exc) == "Invalid domain label '-bad': label starts or ends with '-'"

    def test_invalid_length(self):
        exc = InvalidLength(300)
        assert exc.limit == 253
        assert str(exc) == "Domain is 300 characters long (limit 253)"

    def test_invalid_local_part_with_position(self):
        exc = InvalidLocalPart("consecutive dots", position=4)
        assert exc.position == 4
        assert str(exc) == "Invalid local part at position 4: consecutive dots"

    def test_invalid_local_part_without_position(self):
        assert str(InvalidLocalPart("local part is empty")) == (
            "Invalid local part: local part is empty"
        )

    def test_invalid_domain_wraps_cause(self):
        cause = InvalidLabel("", "domain is empty")
        exc = InvalidDomain(cause)
        assert exc.cause is cause
        assert str(exc).startswith("Invalid domain: Invalid domain label")

    def test_conversion_failure(self):
        exc = ConversionFailure(Grammar.INTERNATIONAL, Grammar.TRANSPORT, "non-ASCII")
        assert exc.source is Grammar.INTERNATIONAL
        assert exc.target is Grammar.TRANSPORT
        assert str(exc) == "Cannot convert rfc6531 address to rfc5321: non-ASCII"

    def test_invalid_format(self):
        assert str(InvalidFormat("Must be ASCII-only")) == (
            "Invalid email format: Must be ASCII-only"
        )
