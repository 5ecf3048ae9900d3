# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Shared value types, capability protocols and exceptions for aumos-did-web."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol


class DIDMethod(str, Enum):
    """Supported DID methods. Only did:web is implemented."""

    WEB = "web"


class VerificationRelationship(str, Enum):
    """Verification relationships (proof purposes) a key can be bound to."""

    AUTHENTICATION = "authentication"
    ASSERTION_METHOD = "assertionMethod"
    KEY_AGREEMENT = "keyAgreement"
    CAPABILITY_INVOCATION = "capabilityInvocation"
    CAPABILITY_DELEGATION = "capabilityDelegation"


class VerificationMethodType(str, Enum):
    """Type of a DID verification method."""

    ED25519_2020 = "Ed25519VerificationKey2020"
    X25519_2020 = "X25519KeyAgreementKey2020"


@dataclass(frozen=True)
class VerificationMethod:
    """A single verification method entry in a DID Document."""

    id: str
    type: VerificationMethodType
    controller: str
    public_key_multibase: str
    # Only populated by a private export; never published.
    private_key_multibase: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return the JSON-LD descriptor for this method."""
        descriptor = {
            "id": self.id,
            "type": self.type.value,
            "controller": self.controller,
            "publicKeyMultibase": self.public_key_multibase,
        }
        if self.private_key_multibase is not None:
            descriptor["privateKeyMultibase"] = self.private_key_multibase
        return descriptor


@dataclass(frozen=True)
class DIDDocument:
    """W3C DID Document.

    ``verification_relationships`` holds, per populated purpose, the list of
    verification methods bound to it. Documents built by this package carry
    exactly one method per purpose.
    """

    context: list[str]
    id: str
    verification_relationships: dict[
        VerificationRelationship, list[VerificationMethod]
    ] = field(default_factory=dict)

    def find_verification_method(
        self, purpose: VerificationRelationship
    ) -> VerificationMethod | None:
        """Return the first verification method bound to *purpose*, if any."""
        methods = self.verification_relationships.get(purpose)
        if not methods:
            return None
        return methods[0]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``{"@context", "id", <purpose>: [...]}`` JSON shape."""
        doc: dict[str, Any] = {
            "@context": list(self.context),
            "id": self.id,
        }
        for purpose, methods in self.verification_relationships.items():
            doc[purpose.value] = [method.to_dict() for method in methods]
        return doc


@dataclass(frozen=True)
class FetchResponse:
    """Outcome of a successful transport fetch."""

    data: Any
    status: int


# ------------------------------------------------------------------
# Capability protocols
# ------------------------------------------------------------------


class KeyPair(Protocol):
    """A key pair handle owned by the caller (typically stored in a KMS)."""

    id: str
    controller: str
    type: VerificationMethodType

    def export(
        self, *, public_key: bool = True, private_key: bool = False
    ) -> VerificationMethod:
        ...


class KeyProvider(Protocol):
    """Generates new key pairs of a named type for a controller DID."""

    async def generate(self, key_type: str, controller: str) -> KeyPair:
        ...


class Transport(Protocol):
    """Fetches a JSON document over HTTPS.

    Failures must raise :class:`TransportError` (or a subclass).
    """

    async def fetch(
        self, url: str, options: Mapping[str, Any] | None = None
    ) -> FetchResponse:
        ...


# ------------------------------------------------------------------
# Exceptions
# ------------------------------------------------------------------


class DIDWebError(Exception):
    """Base class for all aumos-did-web errors."""


class FormatError(DIDWebError, ValueError):
    """Raised for a malformed or missing URL or DID, or a non-HTTPS scheme."""


class UnsupportedDIDMethodError(FormatError):
    """Raised when a DID method is not supported."""


class ConfigurationError(DIDWebError):
    """Raised when a call is missing required configuration or input."""


class KeyPairNotFoundError(DIDWebError, LookupError):
    """Raised when no key pair is bound to a verification relationship."""


class TransportError(DIDWebError):
    """Raised by a transport when a DID document cannot be fetched."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status: int | None = None,
        data: Any = None,
    ) -> None:
        self.url = url
        # HTTP status code; None when no response was received.
        self.status = status
        # Error body from the server, if any.
        self.data = data
        super().__init__(message)
