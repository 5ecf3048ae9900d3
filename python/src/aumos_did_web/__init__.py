# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""aumos-did-web — did:web DID generation and resolution.

Quickstart
----------
>>> import asyncio
>>> from aumos_did_web import CryptographyKeyProvider, DidWebResolver
>>> resolver = DidWebResolver(key_provider=CryptographyKeyProvider())
>>> generated = asyncio.run(resolver.generate(url="https://example.com/users/alice"))
>>> print(generated.document.id)
did:web:example.com:users:alice

Converting between URLs and DIDs requires no network access:

>>> from aumos_did_web import did_from_url, url_from_did
>>> url_from_did("did:web:example.com")
'https://example.com/.well-known/did.json'
"""

from .crypto import CryptographyKeyProvider, Ed25519KeyPair, X25519KeyPair
from .did import did_from_url, parse_did_method, url_from_did
from .keys import initialize_keys
from .resolver import DEFAULT_KEY_MAP, DidWebResolver, GeneratedDocument
from .transport import HttpxTransport
from .types import (
    ConfigurationError,
    DIDDocument,
    DIDWebError,
    FetchResponse,
    FormatError,
    KeyPair,
    KeyPairNotFoundError,
    KeyProvider,
    Transport,
    TransportError,
    UnsupportedDIDMethodError,
    VerificationMethod,
    VerificationMethodType,
    VerificationRelationship,
)

__all__ = [
    # Resolver
    "DidWebResolver",
    "GeneratedDocument",
    "DEFAULT_KEY_MAP",
    # DID <-> URL codec
    "did_from_url",
    "url_from_did",
    "parse_did_method",
    # Key initialization
    "initialize_keys",
    "CryptographyKeyProvider",
    "Ed25519KeyPair",
    "X25519KeyPair",
    # Transport
    "HttpxTransport",
    # Core types
    "DIDDocument",
    "FetchResponse",
    "VerificationMethod",
    "VerificationMethodType",
    "VerificationRelationship",
    "KeyPair",
    "KeyProvider",
    "Transport",
    # Exceptions
    "DIDWebError",
    "FormatError",
    "UnsupportedDIDMethodError",
    "ConfigurationError",
    "KeyPairNotFoundError",
    "TransportError",
]
