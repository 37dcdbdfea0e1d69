"""Interface that cryptographic back ends implement for ADAC."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from adac.model import KeyOptions


class KeyFormat(Enum):
    """How a key passed to :meth:`CryptoProvider.load_key` is expressed."""

    PKCS8 = "pkcs8"
    KEY_ID = "key_id"


class CryptoProvider(ABC):
    """Hashing, signing and verification for ADAC certificates and tokens."""

    @abstractmethod
    def verify(
        self, key_type: KeyOptions, public_key: bytes, data: bytes, signature: bytes
    ) -> None:
        """Check ``signature`` over ``data``; raise an AdacError if it is invalid."""

    @abstractmethod
    def hash(self, key_type: KeyOptions, data: bytes) -> bytes:
        """Return the digest of ``data`` for the algorithm of ``key_type``."""

    @abstractmethod
    def sign(self, key_type: KeyOptions, data: bytes) -> bytes:
        """Sign ``data`` with the currently loaded private key."""

    @abstractmethod
    def load_key(self, key_type: KeyOptions, key_format: KeyFormat, key: bytes) -> bytes:
        """Select a private key for signing and return its public key."""