"""Private-key operations on token-held keys: key identifiers and signing."""

from __future__ import annotations

import hashlib

from adac.model import KeyOptions, UnsupportedAlgorithmError
from adac.session import ID, LABEL, Mechanism, Session, hash_data

_ECDSA = frozenset(
    {
        KeyOptions.ECDSA_P256_SHA256,
        KeyOptions.ECDSA_P384_SHA384,
        KeyOptions.ECDSA_P521_SHA512,
    }
)
_RSA = frozenset({KeyOptions.RSA_3072_SHA256, KeyOptions.RSA_4096_SHA256})

# Ed448 signatures are stored padded to a multiple of four bytes.
_ED448_PADDING = bytes(2)


def kid_from_spki(spki: bytes) -> tuple[str, bytes]:
    """Return the key identifier (lower-case hex and raw SHA-256) of an SPKI."""
    key_id = hashlib.sha256(bytes(spki)).digest()
    return key_id.hex(), key_id


def label_keypair(
    session: Session, spki: bytes, public: int, private: int
) -> tuple[str, bytes, bytes, int, int]:
    """Label both halves of a key pair with the identifier derived from ``spki``.

    Returns ``(kid, key_id, spki, private, public)``.
    """
    spki = bytes(spki)
    kid, key_id = kid_from_spki(spki)
    attributes = {LABEL: kid.encode("ascii"), ID: key_id}
    session.update_attributes(public, attributes)
    session.update_attributes(private, attributes)
    return kid, key_id, spki, private, public


def sign(session: Session, key_type: KeyOptions, handle: int, data: bytes) -> bytes:
    """Sign ``data`` with the token private key ``handle`` in the ADAC encoding."""
    data = bytes(data)
    if key_type in _ECDSA:
        digest = hash_data(session, key_type, data)
        return session.sign(Mechanism.ECDSA, handle, digest)
    if key_type in _RSA:
        return session.sign(Mechanism.SHA256_RSA_PKCS_PSS, handle, data)
    if key_type == KeyOptions.ED25519_SHA512:
        digest = hash_data(session, key_type, data)
        return session.sign(Mechanism.EDDSA, handle, digest)
    if key_type == KeyOptions.ED448_SHAKE256:
        digest = hash_data(session, key_type, data)
        return session.sign(Mechanism.EDDSA, handle, digest) + _ED448_PADDING
    raise UnsupportedAlgorithmError(f"unsupported key type {key_type!r}")