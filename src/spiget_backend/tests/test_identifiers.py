"""Tests for sub-resource identifier classification."""

import pytest

from spiget_backend.utils.identifiers import IdentifierMode, resolve_identifier


@pytest.mark.unit
class TestResolveIdentifier:

    def test_latest(self):
        resolved = resolve_identifier("latest")
        assert resolved.mode is IdentifierMode.LATEST
        assert resolved.numeric_id is None

    def test_numeric_id(self):
        resolved = resolve_identifier("12345")
        assert resolved.mode is IdentifierMode.BY_ID
        assert resolved.numeric_id == 12345

    def test_long_segment_is_token(self):
        token = "3f2a9c1e-7b4d-4e8a-9f0c-2d1b6a5e8c7f"
        resolved = resolve_identifier(token)
        assert resolved.mode is IdentifierMode.BY_TOKEN
        assert resolved.key == token

    def test_length_boundary(self):
        assert resolve_identifier("1" * 32).mode is IdentifierMode.BY_ID
        assert resolve_identifier("1" * 33).mode is IdentifierMode.BY_TOKEN

    def test_short_non_numeric_never_matches_an_id(self):
        resolved = resolve_identifier("abc")
        assert resolved.mode is IdentifierMode.BY_ID
        assert resolved.numeric_id is None

    @pytest.mark.parametrize("segment", ["²", "١٢", "𝟙"])
    def test_unicode_digits_never_match_an_id(self, segment):
        resolved = resolve_identifier(segment)
        assert resolved.mode is IdentifierMode.BY_ID
        assert resolved.numeric_id is None
