"""Test per-grammar character classes."""

import pytest

from email_address.core.enums import Grammar
from email_address.grammar.policy import (
    HEADER_POLICY,
    INTERNATIONAL_POLICY,
    LEGACY_POLICY,
    POLICIES,
    TRANSPORT_POLICY,
)


def test_every_grammar_has_a_policy():
    assert set(POLICIES) == set(Grammar)
    for grammar, policy in POLICIES.items():
        assert policy.grammar is grammar


def test_legacy_and_header_differ_only_by_tag():
    assert LEGACY_POLICY.quoted_whitespace == HEADER_POLICY.quoted_whitespace
    assert LEGACY_POLICY.allow_utf8 == HEADER_POLICY.allow_utf8
    assert LEGACY_POLICY.max_local_length == HEADER_POLICY.max_local_length


class TestAtext:
    @pytest.mark.parametrize("ch", list("aZ09!#$%&'*+-/=?^_`{|}~"))
    def test_allowed_everywhere(self, ch):
        for policy in POLICIES.values():
            assert policy.is_atext(ch)

    @pytest.mark.parametrize("ch", list(' .@"(),:;<>[\\]'))
    def test_specials_rejected(self, ch):
        for policy in POLICIES.values():
            assert not policy.is_atext(ch)

    def test_utf8_only_international(self):
        assert INTERNATIONAL_POLICY.is_atext("用")
        assert not HEADER_POLICY.is_atext("用")
        assert not TRANSPORT_POLICY.is_atext("ñ")

    def test_non_printable_utf8_rejected(self):
        assert not INTERNATIONAL_POLICY.is_atext("\u200b")


class TestQtext:
    def test_space_allowed_everywhere(self):
        for policy in POLICIES.values():
            assert policy.is_qtext(" ")

    def test_tab_not_transport(self):
        assert not TRANSPORT_POLICY.is_qtext("\t")
        assert HEADER_POLICY.is_qtext("\t")
        assert INTERNATIONAL_POLICY.is_qtext("\t")

    @pytest.mark.parametrize("ch", ['"', "\\", "\n", "\x00", "\x7f"])
    def test_rejected(self, ch):
        for policy in POLICIES.values():
            assert not policy.is_qtext(ch)

    def test_specials_allowed(self):
        assert HEADER_POLICY.is_qtext("@")
        assert HEADER_POLICY.is_qtext("(")


class TestQuotable:
    def test_quote_and_backslash(self):
        for policy in POLICIES.values():
            assert policy.is_quotable('"')
            assert policy.is_quotable("\\")

    def test_control_rejected(self):
        assert not HEADER_POLICY.is_quotable("\n")

    def test_utf8_only_international(self):
        assert INTERNATIONAL_POLICY.is_quotable("é")
        assert not LEGACY_POLICY.is_quotable("é")


def test_transport_limits():
    assert TRANSPORT_POLICY.max_local_length == 64
    assert TRANSPORT_POLICY.max_address_length == 254
    assert HEADER_POLICY.max_local_length is None
