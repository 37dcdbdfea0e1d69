"""Abstract token session and the digest selection used by token-backed keys."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum

from adac.model import ED448_HASH_SIZE, KeyOptions, UnsupportedAlgorithmError

# Attribute names used in object templates and attribute queries.
TOKEN = "token"
PRIVATE = "private"
CLASS = "class"
VERIFY = "verify"
KEY_TYPE = "key_type"
LABEL = "label"
ID = "id"
EC_PARAMS = "ec_params"
EC_POINT = "ec_point"
MODULUS = "modulus"
PUBLIC_EXPONENT = "public_exponent"


class Mechanism(IntEnum):
    """Token mechanisms, numbered as in the PKCS#11 specification.

    The ADAC profile fixes the mechanism parameters: EdDSA is always used in
    pre-hash mode with an empty context (Ed25519ph or Ed448ph, depending on the
    key), and RSA-PSS always uses SHA-256, MGF1 with SHA-256 and a 32-byte salt.
    """

    RSA_PKCS_PSS = 0x000D
    ML_DSA = 0x001D
    SHA256_RSA_PKCS_PSS = 0x0043
    SHA256 = 0x0250
    SHA384 = 0x0260
    SHA512 = 0x0270
    ECDSA = 0x1041
    EDDSA = 0x1057


@dataclass(frozen=True)
class MechanismInfo:
    """Capabilities a token reports for one mechanism."""

    min_key_size: int
    max_key_size: int
    sign: bool
    verify: bool


class Session(ABC):
    """A logged-in session on a cryptographic token.

    Implementations raise :class:`adac.model.CryptoProviderError` when the
    token reports a failure. Object handles are plain integers.
    """

    @abstractmethod
    def digest(self, mechanism: Mechanism, data: bytes) -> bytes:
        """Return the digest of ``data`` computed on the token."""

    @abstractmethod
    def sign(self, mechanism: Mechanism, handle: int, data: bytes) -> bytes:
        """Sign ``data`` with the private key ``handle``."""

    @abstractmethod
    def verify(
        self, mechanism: Mechanism, handle: int, data: bytes, signature: bytes
    ) -> None:
        """Check ``signature`` over ``data`` with the public key ``handle``."""

    @abstractmethod
    def get_attribute(self, handle: int, attribute: str) -> bytes:
        """Return the value of ``attribute`` on object ``handle``."""

    @abstractmethod
    def update_attributes(self, handle: int, attributes: Mapping[str, object]) -> None:
        """Set the given attributes on object ``handle``."""

    @abstractmethod
    def create_object(self, template: Mapping[str, object]) -> int:
        """Create an object from ``template`` and return its handle."""

    @abstractmethod
    def destroy_object(self, handle: int) -> None:
        """Remove object ``handle`` from the token."""


_DIGESTS: dict[KeyOptions, Mechanism] = {
    KeyOptions.ECDSA_P256_SHA256: Mechanism.SHA256,
    KeyOptions.RSA_3072_SHA256: Mechanism.SHA256,
    KeyOptions.RSA_4096_SHA256: Mechanism.SHA256,
    KeyOptions.ECDSA_P384_SHA384: Mechanism.SHA384,
    KeyOptions.ECDSA_P521_SHA512: Mechanism.SHA512,
    KeyOptions.ED25519_SHA512: Mechanism.SHA512,
}


def hash_data(session: Session, key_type: KeyOptions, data: bytes) -> bytes:
    """Hash ``data`` with the digest that belongs to ``key_type``.

    SHAKE-256 for Ed448 is computed locally since tokens rarely offer it.
    """
    data = bytes(data)
    if key_type == KeyOptions.ED448_SHAKE256:
        return hashlib.shake_256(data).digest(ED448_HASH_SIZE)
    try:
        mechanism = _DIGESTS[key_type]
    except KeyError:
        raise UnsupportedAlgorithmError(f"no digest for key type {key_type!r}") from None
    return session.digest(mechanism, data)