# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Binding key pairs to the verification relationships of a DID Document."""

from __future__ import annotations

import dataclasses
import logging
from typing import Mapping, Union

from .types import (
    ConfigurationError,
    DIDDocument,
    KeyPair,
    KeyProvider,
    VerificationMethod,
    VerificationRelationship,
)

logger = logging.getLogger(__name__)

# A key-type name (generate a new key) or an existing key pair (reuse it).
KeySpec = Union[str, KeyPair]
KeyMap = Mapping[Union[VerificationRelationship, str], KeySpec]


def _parse_purpose(purpose: VerificationRelationship | str) -> VerificationRelationship:
    try:
        return VerificationRelationship(purpose)
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported key purpose: {purpose!r}.") from exc


async def initialize_keys(
    document: DIDDocument,
    key_provider: KeyProvider | None = None,
    key_map: KeyMap | None = None,
) -> tuple[DIDDocument, dict[str, KeyPair]]:
    """Initialize the keys of a DID Document, one per verification relationship.

    Each entry of *key_map* is either a key-type name, in which case a new key
    pair controlled by ``document.id`` is generated through *key_provider*, or
    an existing key pair, which is used as-is.

    Parameters
    ----------
    document:
        The document skeleton. Its ``id`` must be set.
    key_provider:
        Generates key pairs. Only required when *key_map* names a key type.
    key_map:
        Key types or key pairs by purpose. Defaults to no keys.

    Returns
    -------
    tuple[DIDDocument, dict[str, KeyPair]]
        A copy of *document* with each purpose bound to the public export of
        its key, and the key pairs used, by key id. A key reused across
        purposes appears once.

    Raises
    ------
    ConfigurationError
        If the document has no id, a purpose is not a verification
        relationship, or a key must be generated but no provider was given.
        Validation happens before any key is generated.

    Examples
    --------
    >>> document, key_pairs = await initialize_keys(
    ...     DIDDocument(context=[], id="did:web:example.com"),
    ...     key_provider,
    ...     {
    ...         "capabilityInvocation": existing_key,
    ...         "authentication": "Ed25519VerificationKey2020",
    ...         "keyAgreement": "X25519KeyAgreementKey2020",
    ...     },
    ... )
    """
    if not document.id:
        raise ConfigurationError(
            'DID Document "id" property is required to initialize keys.'
        )

    entries = [
        (_parse_purpose(purpose), key_spec)
        for purpose, key_spec in (key_map or {}).items()
    ]
    if key_provider is None and any(isinstance(k, str) for _, k in entries):
        raise ConfigurationError(
            "A key provider is required to generate keys by type."
        )

    relationships: dict[VerificationRelationship, list[VerificationMethod]] = dict(
        document.verification_relationships
    )
    key_pairs: dict[str, KeyPair] = {}

    for purpose, key_spec in entries:
        if isinstance(key_spec, str):
            key = await key_provider.generate(key_type=key_spec, controller=document.id)
            logger.debug("generated %s key %s for %s", key_spec, key.id, purpose.value)
        else:
            key = key_spec
            logger.debug("using existing key %s for %s", key.id, purpose.value)

        relationships[purpose] = [key.export(public_key=True)]
        key_pairs[key.id] = key

    document = dataclasses.replace(document, verification_relationships=relationships)
    return document, key_pairs
