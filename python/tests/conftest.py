# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Shared fixtures: an in-memory key provider that records its calls."""

from __future__ import annotations

import pytest

from aumos_did_web.types import VerificationMethod, VerificationMethodType


class FakeKeyPair:
    def __init__(self, key_id: str, controller: str, key_type: str) -> None:
        self.id = key_id
        self.controller = controller
        self.type = VerificationMethodType(key_type)
        self.export_calls = 0

    def export(self, *, public_key: bool = True, private_key: bool = False) -> VerificationMethod:
        self.export_calls += 1
        return VerificationMethod(
            id=self.id,
            type=self.type,
            controller=self.controller,
            public_key_multibase=f"z-public-{self.id.rsplit('#', 1)[-1]}",
        )


class FakeKeyProvider:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def generate(self, key_type: str, controller: str) -> FakeKeyPair:
        self.calls.append((key_type, controller))
        return FakeKeyPair(f"{controller}#key-{len(self.calls)}", controller, key_type)


@pytest.fixture
def key_provider() -> FakeKeyProvider:
    return FakeKeyProvider()


@pytest.fixture
def existing_key() -> FakeKeyPair:
    return FakeKeyPair(
        "did:web:example.com#existing",
        "did:web:example.com",
        "Ed25519VerificationKey2020",
    )
