"""Public-key operations on token-held keys: verification and RSA key handling."""

from __future__ import annotations

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from adac.model import (
    ED448_SIGNATURE_SIZE_UNPADDED,
    CryptoProviderError,
    EncodingError,
    InconsistentCryptoError,
    KeyOptions,
    UnsupportedAlgorithmError,
)
from adac.session import (
    CLASS,
    KEY_TYPE,
    MODULUS,
    PRIVATE,
    PUBLIC_EXPONENT,
    TOKEN,
    VERIFY,
    Mechanism,
    Session,
    hash_data,
)

_RSA_EXPONENT = b"\x01\x00\x01"
_CKO_PUBLIC_KEY = 0x02
_CKK_RSA = 0x00

_ECDSA = frozenset(
    {
        KeyOptions.ECDSA_P256_SHA256,
        KeyOptions.ECDSA_P384_SHA384,
        KeyOptions.ECDSA_P521_SHA512,
    }
)
_EC = _ECDSA | {KeyOptions.ED25519_SHA512, KeyOptions.ED448_SHAKE256}
_RSA_BITS = {
    KeyOptions.RSA_3072_SHA256: 3072,
    KeyOptions.RSA_4096_SHA256: 4096,
}


def ec_verify(
    session: Session, key_type: KeyOptions, handle: int, data: bytes, signature: bytes
) -> None:
    """Verify an ECDSA or pre-hashed EdDSA signature with the public key ``handle``."""
    digest = hash_data(session, key_type, data)
    signature = bytes(signature)
    if key_type in _ECDSA:
        session.verify(Mechanism.ECDSA, handle, digest, signature)
    elif key_type == KeyOptions.ED25519_SHA512:
        session.verify(Mechanism.EDDSA, handle, digest, signature)
    elif key_type == KeyOptions.ED448_SHAKE256:
        session.verify(
            Mechanism.EDDSA, handle, digest, signature[:ED448_SIGNATURE_SIZE_UNPADDED]
        )
    else:
        raise UnsupportedAlgorithmError(f"{key_type!r} is not an elliptic-curve key")


def rsa_import_public_key(
    session: Session, key_type: KeyOptions, public_key: bytes
) -> int:
    """Create a session RSA public key from a raw big-endian modulus."""
    template = {
        TOKEN: False,
        PRIVATE: False,
        CLASS: _CKO_PUBLIC_KEY,
        VERIFY: True,
        KEY_TYPE: _CKK_RSA,
        MODULUS: bytes(public_key),
        PUBLIC_EXPONENT: _RSA_EXPONENT,
    }
    return session.create_object(template)


def rsa_verify(
    session: Session, key_type: KeyOptions, handle: int, data: bytes, signature: bytes
) -> None:
    """Verify an RSA-PSS (SHA-256, 32-byte salt) signature over ``data``."""
    digest = session.digest(Mechanism.SHA256, bytes(data))
    session.verify(Mechanism.RSA_PKCS_PSS, handle, digest, bytes(signature))


def rsa_load_public_key(session: Session, key_type: KeyOptions, handle: int) -> bytes:
    """Read an RSA public key from the token and return it as DER SubjectPublicKeyInfo."""
    try:
        bits = _RSA_BITS[key_type]
    except KeyError:
        raise InconsistentCryptoError(f"{key_type!r} is not an RSA key") from None

    modulus = session.get_attribute(handle, MODULUS)
    if not modulus:
        raise CryptoProviderError("Missing RSA Modulus")
    exponent = session.get_attribute(handle, PUBLIC_EXPONENT) or _RSA_EXPONENT

    n = int.from_bytes(modulus, "big")
    e = int.from_bytes(exponent, "big")
    if n.bit_length() != bits:
        raise InconsistentCryptoError(
            f"RSA modulus has {n.bit_length()} bits, expected {bits}"
        )

    try:
        key = rsa.RSAPublicNumbers(e, n).public_key()
    except ValueError as exc:
        raise EncodingError(f"Rebuilding RSA public-key {exc}") from exc
    return key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )


def verify(
    session: Session, key_type: KeyOptions, handle: int, data: bytes, signature: bytes
) -> None:
    """Verify ``signature`` over ``data`` with the token public key ``handle``."""
    if key_type in _EC:
        ec_verify(session, key_type, handle, data, signature)
    elif key_type in _RSA_BITS:
        rsa_verify(session, key_type, handle, data, signature)
    else:
        raise UnsupportedAlgorithmError(f"unsupported key type {key_type!r}")