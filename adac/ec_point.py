"""Elliptic-curve key classification and EC point decoding for token keys."""

from __future__ import annotations

from enum import IntEnum

from adac.model import (
    ED448_PUBLIC_KEY_SIZE_UNPADDED,
    ED25519_PUBLIC_KEY_SIZE,
    EncodingError,
    InconsistentCryptoError,
    KeyOptions,
)

_ECDSA = frozenset(
    {
        KeyOptions.ECDSA_P256_SHA256,
        KeyOptions.ECDSA_P384_SHA384,
        KeyOptions.ECDSA_P521_SHA512,
    }
)
_EDDSA = frozenset({KeyOptions.ED25519_SHA512, KeyOptions.ED448_SHAKE256})

_OCTET_STRING_TAG = 0x04


class EcKeyType(IntEnum):
    """Token key types for elliptic-curve keys, numbered as in PKCS#11."""

    EC = 0x03
    EC_EDWARDS = 0x40


def ec_key_type(key_type: KeyOptions) -> EcKeyType:
    """Return the token key type for an ECDSA or EdDSA key."""
    if key_type in _ECDSA:
        return EcKeyType.EC
    if key_type in _EDDSA:
        return EcKeyType.EC_EDWARDS
    raise InconsistentCryptoError(f"{key_type!r} is not an elliptic-curve key")


def _decode_octet_string(data: bytes) -> bytes:
    """Return the content of a DER OCTET STRING at the start of ``data``."""

    def failure(reason: str) -> EncodingError:
        return EncodingError(f"Decoding from SEC1 format failed: {reason}")

    if not data:
        raise failure("empty input")
    if data[0] != _OCTET_STRING_TAG:
        raise failure(f"unexpected tag {data[0]:#04x}")
    if len(data) < 2:
        raise failure("missing length")

    first = data[1]
    if first < 0x80:
        length, offset = first, 2
    elif first == 0x80:
        raise failure("indefinite length")
    else:
        count = first & 0x7F
        if count > 4:
            raise failure("length too large")
        raw = data[2:2 + count]
        if len(raw) < count:
            raise failure("truncated length")
        length = int.from_bytes(raw, "big")
        if length < 0x80 or raw[0] == 0:
            raise failure("non-canonical length")
        offset = 2 + count

    content = data[offset:offset + length]
    if len(content) < length:
        raise failure("truncated content")
    return content


def sec1_from_ec_point(key_type: KeyOptions, point: bytes) -> bytes:
    """Extract the raw public point from a token's EC point attribute.

    ECDSA points are always DER OCTET STRINGs. EdDSA points may be stored raw
    or wrapped; they are unwrapped only when longer than a raw key.
    """
    point = bytes(point)
    if key_type in _ECDSA:
        return _decode_octet_string(point)
    if key_type == KeyOptions.ED25519_SHA512:
        if len(point) > ED25519_PUBLIC_KEY_SIZE:
            return _decode_octet_string(point)
        return point
    if key_type == KeyOptions.ED448_SHAKE256:
        if len(point) > ED448_PUBLIC_KEY_SIZE_UNPADDED:
            return _decode_octet_string(point)
        return point
    raise InconsistentCryptoError(f"{key_type!r} is not an elliptic-curve key")