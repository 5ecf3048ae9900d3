# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Bijective conversion between HTTPS URLs and did:web identifiers.

Examples::

    https://example.com                       <-> did:web:example.com
    https://example.com/.well-known/did.json   -> did:web:example.com
    https://example.com:8443/users/alice      <-> did:web:example.com%3A8443:users:alice
    https://bücher.de/                         -> did:web:xn--bcher-kva.de

The bare ``did:web:<host>`` form always resolves to the default document
location, ``https://<host>/.well-known/did.json``.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from urllib.parse import quote, unquote, urlsplit

from .types import DIDMethod, FormatError, UnsupportedDIDMethodError

logger = logging.getLogger(__name__)

DID_WEB_PREFIX = "did:web:"

# Default location of a did:web document on its host.
WELL_KNOWN_PATH = "/.well-known/did.json"

# Characters encodeURIComponent leaves alone besides [A-Za-z0-9_.~-].
_SAFE_CHARS = "!*'()"

_HTTPS_DEFAULT_PORT = 443

# Forbidden domain code points (WHATWG URL), checked after IDNA encoding.
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")

# A "%" not followed by two hex digits.
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _encode_component(value: str) -> str:
    return quote(value, safe=_SAFE_CHARS)


def _decode_component(value: str, did: str) -> str:
    if _BAD_ESCAPE.search(value):
        raise FormatError(f"Malformed percent-encoding in DID: {did!r}.")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as exc:
        raise FormatError(f"Malformed percent-encoding in DID: {did!r}.") from exc


def _normalize_host(netloc: str, hostname: str, port: int | None, url: str) -> str:
    """Return the serialized host (``URL.host``): ASCII, default port dropped."""
    if netloc.rpartition("@")[2].startswith("["):
        try:
            host = "[" + ipaddress.IPv6Address(hostname).compressed + "]"
        except ValueError as exc:
            raise FormatError(f"Invalid url: {url!r}.") from exc
    else:
        try:
            host = hostname.encode("idna").decode("ascii")
        except UnicodeError as exc:
            raise FormatError(f"Invalid url: {url!r}.") from exc
        if _FORBIDDEN_HOST_CHARS.search(host):
            raise FormatError(f"Invalid url: {url!r}.")

    if port is not None and port != _HTTPS_DEFAULT_PORT:
        host += f":{port}"
    return host


def did_from_url(url: str | None) -> str:
    """Convert an HTTPS URL into its did:web identifier.

    The path components ``""``, ``/`` and ``/.well-known/did.json`` all denote
    the default document location and yield the bare host identifier. Empty
    path segments (trailing or doubled slashes) are dropped; query and
    fragment are ignored. Internationalized hosts are punycode-encoded.

    Raises
    ------
    FormatError
        If *url* is empty, is not a valid URL, or does not use ``https``.
    """
    if not url:
        raise FormatError("Cannot convert url to did, missing url.")

    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError as exc:
        raise FormatError(f"Invalid url: {url!r}.") from exc

    scheme = parsed.scheme.lower()
    if scheme == "http":
        raise FormatError("did:web does not support non-HTTPS URLs.")
    if scheme != "https" or not parsed.hostname:
        raise FormatError(f"Invalid url: {url!r}.")

    host = _normalize_host(parsed.netloc, parsed.hostname, port, url)
    did = DID_WEB_PREFIX + _encode_component(host)

    path = parsed.path
    if path not in ("", "/", WELL_KNOWN_PATH):
        segments = [_encode_component(s) for s in path.split("/") if s]
        if segments:
            did += ":" + ":".join(segments)

    logger.debug("derived %s from %s", did, url)
    return did


def url_from_did(did: str | None) -> str:
    """Convert a did:web identifier into the HTTPS URL of its DID document.

    Raises
    ------
    FormatError
        If *did* is empty, has an empty host component, or contains a
        malformed percent-escape.
    UnsupportedDIDMethodError
        If *did* is not a ``did:web`` identifier.
    """
    if not did:
        raise FormatError("Cannot convert did to url, missing did.")
    parse_did_method(did)  # Raises UnsupportedDIDMethodError early.

    _did, _method, host, *path_fragments = did.split(":")
    if not host:
        raise FormatError(f"Empty did:web host in: {did!r}.")

    if path_fragments:
        path = "/" + "/".join(
            _decode_component(fragment, did) for fragment in path_fragments
        )
    else:
        path = WELL_KNOWN_PATH

    url = "https://" + _decode_component(host, did) + path
    logger.debug("derived %s from %s", url, did)
    return url


def parse_did_method(did: str) -> DIDMethod:
    """Extract and return the DID method. Only 'web' is supported."""
    parts = did.split(":", 2)
    if len(parts) < 3 or parts[0] != "did":
        raise UnsupportedDIDMethodError(f"DID Method not supported: {did!r}.")
    try:
        return DIDMethod(parts[1])
    except ValueError as exc:
        raise UnsupportedDIDMethodError(
            f"DID Method not supported: {did!r}."
        ) from exc
