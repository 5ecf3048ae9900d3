# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""DidWebResolver — generation and retrieval of did:web DID Documents.

The resolver covers two operations:

1. **generate** — derive the DID (from a URL when needed), compose a DID
   Document and initialize its verification-relationship keys. The key pairs
   are handed back to the caller for storage in a KMS; nothing is persisted.
2. **get** — derive the document URL from the DID and fetch it through the
   configured transport. The fetched document is returned as parsed JSON,
   without validation.

For the URL <-> DID codec, see :mod:`did`. For key binding, see :mod:`keys`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .did import did_from_url, url_from_did
from .keys import KeyMap, initialize_keys
from .transport import HttpxTransport
from .types import (
    ConfigurationError,
    DIDDocument,
    KeyPair,
    KeyPairNotFoundError,
    KeyProvider,
    Transport,
    VerificationMethodType,
    VerificationRelationship,
)

logger = logging.getLogger(__name__)

DID_CONTEXT_URL = "https://www.w3.org/ns/did/v1"
ED25519_2020_CONTEXT_URL = "https://w3id.org/security/suites/ed25519-2020/v1"
X25519_2020_CONTEXT_URL = "https://w3id.org/security/suites/x25519-2020/v1"

DEFAULT_KEY_MAP: Mapping[VerificationRelationship, str] = {
    VerificationRelationship.CAPABILITY_INVOCATION: VerificationMethodType.ED25519_2020,
    VerificationRelationship.AUTHENTICATION: VerificationMethodType.ED25519_2020,
    VerificationRelationship.ASSERTION_METHOD: VerificationMethodType.ED25519_2020,
    VerificationRelationship.CAPABILITY_DELEGATION: VerificationMethodType.ED25519_2020,
    VerificationRelationship.KEY_AGREEMENT: VerificationMethodType.X25519_2020,
}


@dataclass(frozen=True)
class GeneratedDocument:
    """A generated DID Document along with the key pairs used to build it."""

    document: DIDDocument
    # Key pairs by key id, owned by the caller.
    key_pairs: dict[str, KeyPair]

    def method_for(self, purpose: VerificationRelationship | str) -> KeyPair:
        """Return the key pair bound to *purpose* (e.g. ``"authentication"``).

        Raises
        ------
        ConfigurationError
            If *purpose* is not a verification relationship.
        KeyPairNotFoundError
            If no key is bound to *purpose* in this document.
        """
        try:
            relationship = VerificationRelationship(purpose)
        except ValueError as exc:
            raise ConfigurationError(f"Unsupported key purpose: {purpose!r}.") from exc

        method = self.document.find_verification_method(relationship)
        if method is None:
            raise KeyPairNotFoundError(
                f"No verification method for purpose {relationship.value!r}."
            )
        try:
            return self.key_pairs[method.id]
        except KeyError as exc:
            raise KeyPairNotFoundError(
                f"No key pair for verification method {method.id!r}."
            ) from exc


class DidWebResolver:
    """Generates and fetches did:web DID Documents.

    Parameters
    ----------
    key_provider:
        Default key provider used by :meth:`generate` for key-type entries of
        the key map, e.g. :class:`~crypto.CryptographyKeyProvider`.
    key_map:
        Default key types (or key pairs) by purpose. Defaults to Ed25519 keys
        for every relationship but ``keyAgreement``, which gets an X25519 key.
    transport:
        Transport used by :meth:`get`. When omitted, an
        :class:`~transport.HttpxTransport` is created on first use and closed
        by :meth:`aclose`. A transport passed in is never closed here.

    Examples
    --------
    >>> async with DidWebResolver(key_provider=CryptographyKeyProvider()) as resolver:
    ...     generated = await resolver.generate(url="https://example.com")
    ...     doc = await resolver.get(did="did:web:example.com")
    >>> generated.document.id
    'did:web:example.com'
    """

    method = "web"

    def __init__(
        self,
        *,
        key_provider: KeyProvider | None = None,
        key_map: KeyMap = DEFAULT_KEY_MAP,
        transport: Transport | None = None,
    ) -> None:
        self.key_provider = key_provider
        self.key_map = key_map
        self._transport = transport
        self._owned_transport: HttpxTransport | None = None

    @property
    def transport(self) -> Transport:
        """The transport used by :meth:`get`."""
        if self._transport is None:
            self._owned_transport = HttpxTransport()
            self._transport = self._owned_transport
        return self._transport

    # ------------------------------------------------------------------
    # Context manager support
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "DidWebResolver":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the default transport if this resolver created one."""
        if self._owned_transport is not None:
            await self._owned_transport.aclose()
            self._owned_transport = None
            self._transport = None

    async def generate(
        self,
        *,
        did: str | None = None,
        url: str | None = None,
        key_map: KeyMap | None = None,
        key_provider: KeyProvider | None = None,
    ) -> GeneratedDocument:
        """Generate a new DID Document and initialize its keys.

        Either *did* or *url* is required; the DID is derived from *url* when
        *did* is absent.

        Raises
        ------
        FormatError
            If the DID has to be derived from a missing or invalid URL.
        ConfigurationError
            If the key map is invalid or keys must be generated without a
            key provider.
        """
        did = did or did_from_url(url)

        document = DIDDocument(
            context=[
                DID_CONTEXT_URL,
                ED25519_2020_CONTEXT_URL,
                X25519_2020_CONTEXT_URL,
            ],
            id=did,
        )

        document, key_pairs = await initialize_keys(
            document,
            key_provider or self.key_provider,
            self.key_map if key_map is None else key_map,
        )
        logger.debug("generated DID Document %s with %d key(s)", did, len(key_pairs))

        return GeneratedDocument(document=document, key_pairs=key_pairs)

    async def get(
        self,
        *,
        did: str | None = None,
        url: str | None = None,
        transport_options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Fetch the DID Document for *did* (or directly from *url*).

        *transport_options* are handed to the transport untouched, e.g.
        ``{"verify": False}`` to accept a self-signed certificate in tests.

        Returns
        -------
        Any
            The parsed JSON body, unvalidated.

        Raises
        ------
        ConfigurationError
            If neither *did* nor *url* is given.
        FormatError
            If *did* is not a valid did:web DID.
        TransportError
            Propagated unchanged from the transport, after being logged.
        """
        if not did and not url:
            raise ConfigurationError("A DID or a URL is required.")
        url = url or url_from_did(did)

        try:
            response = await self.transport.fetch(url, transport_options)
        except Exception as exc:
            # status is the HTTP status code, data the server's error body
            logger.error(
                "Http %s error: %s",
                getattr(exc, "status", None),
                getattr(exc, "data", None),
            )
            raise

        return response.data
