from __future__ import annotations

from typing import Protocol

from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)


class KeyStore(Protocol):
    """
    Source of the asymmetric key pair.

    Both loaders raise :class:`~commerce_auth.services._shared.errors.KeyMaterialError`
    when the key is missing or cannot be parsed.
    """

    def load_private_key(self) -> PrivateKeyTypes: ...

    def load_public_key(self) -> PublicKeyTypes: ...
