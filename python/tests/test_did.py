# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Tests for aumos_did_web.did — the URL <-> did:web codec."""

import logging

import pytest

from aumos_did_web.did import did_from_url, parse_did_method, url_from_did
from aumos_did_web.types import DIDMethod, FormatError, UnsupportedDIDMethodError


class TestDidFromUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "https://example.com/",
            "https://example.com/.well-known/did.json",
        ],
    )
    def test_default_location_yields_bare_host(self, url):
        assert did_from_url(url) == "did:web:example.com"

    def test_path_segments_are_colon_joined(self):
        assert did_from_url("https://example.com/a/b") == "did:web:example.com:a:b"

    def test_port_is_percent_encoded(self):
        assert (
            did_from_url("https://example.com:8443/users/alice")
            == "did:web:example.com%3A8443:users:alice"
        )

    def test_default_https_port_is_dropped(self):
        assert did_from_url("https://example.com:443/") == "did:web:example.com"

    def test_host_is_lowercased(self):
        assert did_from_url("https://Example.COM/a") == "did:web:example.com:a"

    def test_userinfo_is_ignored(self):
        assert did_from_url("https://user:pw@example.com/a") == "did:web:example.com:a"

    def test_query_and_fragment_are_ignored(self):
        assert did_from_url("https://example.com/a?x=1#frag") == "did:web:example.com:a"

    def test_trailing_slash_is_dropped(self):
        assert did_from_url("https://example.com/a/") == "did:web:example.com:a"

    def test_doubled_slash_is_collapsed(self):
        assert did_from_url("https://example.com/a//b") == "did:web:example.com:a:b"

    def test_segments_are_percent_encoded(self):
        assert did_from_url("https://example.com/hello world") == (
            "did:web:example.com:hello%20world"
        )
        assert did_from_url("https://example.com/a%20b") == "did:web:example.com:a%2520b"

    def test_uri_component_safe_characters_are_kept(self):
        assert did_from_url("https://example.com/a-b_c.d~e!f*g'h(i)") == (
            "did:web:example.com:a-b_c.d~e!f*g'h(i)"
        )

    def test_ipv6_host(self):
        assert did_from_url("https://[::1]:8443/a") == "did:web:%5B%3A%3A1%5D%3A8443:a"

    def test_ipv6_host_is_compressed(self):
        assert did_from_url("https://[0:0:0:0:0:0:0:1]/") == "did:web:%5B%3A%3A1%5D"

    def test_internationalized_host_is_punycoded(self):
        assert did_from_url("https://bücher.de/") == "did:web:xn--bcher-kva.de"
        assert did_from_url("https://Bücher.de:8443/a") == (
            "did:web:xn--bcher-kva.de%3A8443:a"
        )

    def test_http_is_rejected(self):
        with pytest.raises(FormatError, match="non-HTTPS"):
            did_from_url("http://example.com")

    @pytest.mark.parametrize("url", ["", None])
    def test_missing_url(self, url):
        with pytest.raises(FormatError, match="missing url"):
            did_from_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://example.com",
            "not a url",
            "https:///path",
            "https://example.com:notaport/",
            "https://exa mple.com/a",
            "https://exa|mple.com/",
            "https://exa%20mple.com/",
            "https://[::zz]/",
        ],
    )
    def test_invalid_url(self, url):
        with pytest.raises(FormatError, match="Invalid url"):
            did_from_url(url)


class TestUrlFromDid:
    def test_bare_host_resolves_to_well_known(self):
        assert url_from_did("did:web:example.com") == (
            "https://example.com/.well-known/did.json"
        )

    def test_path_segments(self):
        assert url_from_did("did:web:example.com:a:b") == "https://example.com/a/b"

    def test_encoded_port(self):
        assert url_from_did("did:web:example.com%3A8443") == (
            "https://example.com:8443/.well-known/did.json"
        )

    def test_segments_are_percent_decoded(self):
        assert url_from_did("did:web:example.com:hello%20world") == (
            "https://example.com/hello world"
        )

    def test_other_method_is_unsupported(self):
        with pytest.raises(UnsupportedDIDMethodError):
            url_from_did("did:key:abc")

    def test_not_a_did_is_unsupported(self):
        with pytest.raises(UnsupportedDIDMethodError):
            url_from_did("web:example.com")

    @pytest.mark.parametrize("did", ["", None])
    def test_missing_did(self, did):
        with pytest.raises(FormatError, match="missing did"):
            url_from_did(did)

    def test_empty_host(self):
        with pytest.raises(FormatError, match="Empty did:web host"):
            url_from_did("did:web:")

    @pytest.mark.parametrize(
        "did",
        [
            "did:web:example.com:%E0%A4%A",
            "did:web:example.com:a%zzb",
            "did:web:example.com:%",
            "did:web:example.com:%FF",
            "did:web:ex%G1ample.com",
        ],
    )
    def test_malformed_percent_encoding(self, did):
        with pytest.raises(FormatError, match="Malformed percent-encoding"):
            url_from_did(did)

    def test_punycode_host_resolves(self):
        assert url_from_did("did:web:xn--bcher-kva.de") == (
            "https://xn--bcher-kva.de/.well-known/did.json"
        )


class TestRoundTrip:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/a/b",
            "https://example.com:8443/users/alice",
            "https://example.com/a%20b",
            "https://[::1]:8443/x",
        ],
    )
    def test_url_survives_round_trip(self, url):
        assert url_from_did(did_from_url(url)) == url

    @pytest.mark.parametrize(
        "url", ["https://example.com/", "https://example.com/.well-known/did.json"]
    )
    def test_default_location_round_trips_to_well_known(self, url):
        assert url_from_did(did_from_url(url)) == (
            "https://example.com/.well-known/did.json"
        )

    def test_did_survives_round_trip(self):
        did = "did:web:example.com%3A8443:users:alice"
        assert did_from_url(url_from_did(did)) == did


class TestLogging:
    def test_derivations_are_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="aumos_did_web.did"):
            did_from_url("https://example.com/a/b")
            url_from_did("did:web:example.com")

        assert "derived did:web:example.com:a:b from https://example.com/a/b" in caplog.text
        assert "derived https://example.com/.well-known/did.json" in caplog.text


class TestParseDidMethod:
    def test_web(self):
        assert parse_did_method("did:web:example.com") is DIDMethod.WEB

    def test_unknown_method(self):
        with pytest.raises(UnsupportedDIDMethodError):
            parse_did_method("did:key:z6Mk")

    def test_not_a_did(self):
        with pytest.raises(UnsupportedDIDMethodError):
            parse_did_method("example.com")
