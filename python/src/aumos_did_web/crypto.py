# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Ed25519 and X25519 key pairs backed by the ``cryptography`` package.

Key identifiers follow the 2020 suites: ``<controller>#<fingerprint>``, where
the fingerprint is the multibase (base58btc, prefix ``z``) encoding of the
multicodec-prefixed public key. The same encoding is published as
``publicKeyMultibase``.

:class:`CryptographyKeyProvider` is the default key provider used by
:class:`~resolver.DidWebResolver` callers that do not bring their own KMS.
"""

from __future__ import annotations

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from .types import ConfigurationError, VerificationMethod, VerificationMethodType

# Multicodec varint prefixes.
_ED25519_PUB_PREFIX = bytes([0xED, 0x01])
_ED25519_PRIV_PREFIX = bytes([0x80, 0x26])
_X25519_PUB_PREFIX = bytes([0xEC, 0x01])
_X25519_PRIV_PREFIX = bytes([0x82, 0x26])

# Base58btc alphabet (Bitcoin alphabet)
_BASE58_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def multibase_encode(prefix: bytes, key_bytes: bytes) -> str:
    """Return ``z`` + base58btc(prefix || key_bytes).

    Leading zero bytes map to ``1`` characters, as in Bitcoin base58.
    """
    data = prefix + key_bytes
    zeros = len(data) - len(data.lstrip(b"\x00"))

    n = int.from_bytes(data, "big")
    digits = b""
    while n > 0:
        n, remainder = divmod(n, 58)
        digits = _BASE58_ALPHABET[remainder : remainder + 1] + digits

    return "z" + (b"1" * zeros + digits).decode("ascii")


class Ed25519KeyPair:
    """An Ed25519VerificationKey2020 key pair."""

    type = VerificationMethodType.ED25519_2020

    def __init__(self, private_key: Ed25519PrivateKey, *, controller: str) -> None:
        self._private_key = private_key
        self.controller = controller
        self.public_key_bytes = private_key.public_key().public_bytes(
            Encoding.Raw, PublicFormat.Raw
        )
        self.fingerprint = multibase_encode(_ED25519_PUB_PREFIX, self.public_key_bytes)
        self.id = f"{controller}#{self.fingerprint}"

    @classmethod
    def generate(cls, *, controller: str) -> "Ed25519KeyPair":
        return cls(Ed25519PrivateKey.generate(), controller=controller)

    def export(
        self, *, public_key: bool = True, private_key: bool = False
    ) -> VerificationMethod:
        """Export the verification method descriptor.

        The private key is only included when *private_key* is true; the
        Ed25519 private multibase carries the 32-byte seed followed by the
        public key.
        """
        private_multibase = None
        if private_key:
            seed = self._private_key.private_bytes(
                Encoding.Raw, PrivateFormat.Raw, NoEncryption()
            )
            private_multibase = multibase_encode(
                _ED25519_PRIV_PREFIX, seed + self.public_key_bytes
            )
        return VerificationMethod(
            id=self.id,
            type=self.type,
            controller=self.controller,
            public_key_multibase=self.fingerprint if public_key else "",
            private_key_multibase=private_multibase,
        )


class X25519KeyPair:
    """An X25519KeyAgreementKey2020 key pair."""

    type = VerificationMethodType.X25519_2020

    def __init__(self, private_key: X25519PrivateKey, *, controller: str) -> None:
        self._private_key = private_key
        self.controller = controller
        self.public_key_bytes = private_key.public_key().public_bytes(
            Encoding.Raw, PublicFormat.Raw
        )
        self.fingerprint = multibase_encode(_X25519_PUB_PREFIX, self.public_key_bytes)
        self.id = f"{controller}#{self.fingerprint}"

    @classmethod
    def generate(cls, *, controller: str) -> "X25519KeyPair":
        return cls(X25519PrivateKey.generate(), controller=controller)

    def export(
        self, *, public_key: bool = True, private_key: bool = False
    ) -> VerificationMethod:
        private_multibase = None
        if private_key:
            raw = self._private_key.private_bytes(
                Encoding.Raw, PrivateFormat.Raw, NoEncryption()
            )
            private_multibase = multibase_encode(_X25519_PRIV_PREFIX, raw)
        return VerificationMethod(
            id=self.id,
            type=self.type,
            controller=self.controller,
            public_key_multibase=self.fingerprint if public_key else "",
            private_key_multibase=private_multibase,
        )


_KEY_PAIR_CLASSES = {
    VerificationMethodType.ED25519_2020: Ed25519KeyPair,
    VerificationMethodType.X25519_2020: X25519KeyPair,
}


class CryptographyKeyProvider:
    """Key provider that generates key pairs in-process.

    The returned key pairs hold their private keys in memory; persisting them
    is the caller's responsibility.
    """

    async def generate(
        self, key_type: str, controller: str
    ) -> Ed25519KeyPair | X25519KeyPair:
        try:
            key_class = _KEY_PAIR_CLASSES[VerificationMethodType(key_type)]
        except ValueError as exc:
            raise ConfigurationError(
                f"Unsupported key type: {key_type!r}. "
                f"Supported: {sorted(t.value for t in _KEY_PAIR_CLASSES)}"
            ) from exc
        return key_class.generate(controller=controller)
