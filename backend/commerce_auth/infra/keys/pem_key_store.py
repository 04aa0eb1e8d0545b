# commerce_auth/infra/keys/pem_key_store.py
from __future__ import annotations

import logging
import os
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes, PublicKeyTypes

from commerce_auth.core.logger import log_event
from commerce_auth.services._shared.errors import KeyMaterialError
from commerce_auth.services._shared.ports.key_store import KeyStore

log = logging.getLogger(__name__)


class PemKeyStore(KeyStore):
    """
    Load the RSA key pair from PEM files.

    The private key is PKCS#8 or traditional OpenSSL PEM, unencrypted; the
    public key is a SubjectPublicKeyInfo PEM.

    :param private_key_path: Path of the signing key.
    :param public_key_path: Path of the verification key.
    """

    def __init__(
        self,
        private_key_path: str | os.PathLike[str],
        public_key_path: str | os.PathLike[str],
    ) -> None:
        self.private_key_path = Path(private_key_path)
        self.public_key_path = Path(public_key_path)

    def load_private_key(self) -> PrivateKeyTypes:
        data = self._read(self.private_key_path, "private")
        try:
            key = serialization.load_pem_private_key(data, password=None)
        except (ValueError, TypeError) as exc:
            raise KeyMaterialError(f"Unparseable private key: {self.private_key_path}") from exc
        log_event(log, "keys.loaded", message=f"private key loaded from {self.private_key_path}")
        return key

    def load_public_key(self) -> PublicKeyTypes:
        data = self._read(self.public_key_path, "public")
        try:
            key = serialization.load_pem_public_key(data)
        except (ValueError, TypeError) as exc:
            raise KeyMaterialError(f"Unparseable public key: {self.public_key_path}") from exc
        log_event(log, "keys.loaded", message=f"public key loaded from {self.public_key_path}")
        return key

    @staticmethod
    def _read(path: Path, kind: str) -> bytes:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise KeyMaterialError(f"Cannot read {kind} key: {path}") from exc
        if not data.strip():
            raise KeyMaterialError(f"Empty {kind} key: {path}")
        return data


def generate_key_pair(
    private_key_path: str | os.PathLike[str],
    public_key_path: str | os.PathLike[str],
    *,
    key_size: int = 2048,
) -> None:
    """
    Write a fresh RSA key pair as PEM files (PKCS#8 private, SPKI public).

    Parent directories are created; the private key file is made
    owner-readable only.
    """
    private_path = Path(private_key_path)
    public_path = Path(public_key_path)
    private_path.parent.mkdir(parents=True, exist_ok=True)
    public_path.parent.mkdir(parents=True, exist_ok=True)

    key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    private_path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    private_path.chmod(0o600)
    public_path.write_bytes(
        key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    )
