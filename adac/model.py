"""Core ADAC data model: key types, certificate and token headers, TLV framing."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar


class AdacError(Exception):
    """Base class for every ADAC failure."""


class InvalidLengthError(AdacError):
    """A buffer or field does not have the expected length."""


class InconsistentCryptoError(AdacError):
    """Key type and signature type (or other crypto parameters) disagree."""


class InconsistentVersionError(AdacError):
    """A field or algorithm is not allowed by the declared format version."""


class InputOutputError(AdacError):
    """Reading or writing external data failed."""


class UnsupportedAlgorithmError(AdacError):
    """The requested algorithm is not supported."""


class CryptoProviderError(AdacError):
    """The underlying cryptographic provider reported a failure."""


class EncodingError(AdacError):
    """Data could not be encoded or decoded."""


class InvalidSignatureError(AdacError):
    """A signature did not verify."""


class KeyOptions(IntEnum):
    """Key and signature algorithm identifiers."""

    ECDSA_P256_SHA256 = 0x01
    ECDSA_P521_SHA512 = 0x02
    RSA_3072_SHA256 = 0x03
    RSA_4096_SHA256 = 0x04
    ED25519_SHA512 = 0x05
    ED448_SHAKE256 = 0x06
    SM_SM2_SM3 = 0x07
    CMAC_AES = 0x08
    HMAC_SHA256 = 0x09
    ECDSA_P384_SHA384 = 0x0A
    MLDSA_44_SHA256 = 0x0B
    MLDSA_65_SHA384 = 0x0C
    MLDSA_87_SHA512 = 0x0D


class CertificateRole(IntEnum):
    """Role of a certificate in a chain."""

    ROOT = 0x01
    INTERMEDIATE = 0x02
    LEAF = 0x03


class CertificateUsage(IntEnum):
    """Intended usage of a certificate."""

    NEUTRAL = 0x00
    STANDARD = 0x01
    RMA = 0x02


@dataclass(frozen=True)
class AdacVersion:
    """Format version as major.minor."""

    major: int = 1
    minor: int = 0


ECDSA_P256_PUBLIC_KEY_SIZE = 64
ECDSA_P256_SIGNATURE_SIZE = 64
ECDSA_P256_HASH_SIZE = 32

ECDSA_P384_PUBLIC_KEY_SIZE = 96
ECDSA_P384_SIGNATURE_SIZE = 96
ECDSA_P384_HASH_SIZE = 48

ECDSA_P521_PUBLIC_KEY_SIZE = 132
ECDSA_P521_SIGNATURE_SIZE = 132
ECDSA_P521_HASH_SIZE = 64

ED25519_PUBLIC_KEY_SIZE = 32
ED25519_SIGNATURE_SIZE = 64
ED25519_HASH_SIZE = 64

ED448_PUBLIC_KEY_SIZE = 60
ED448_PUBLIC_KEY_SIZE_UNPADDED = 57
ED448_SIGNATURE_SIZE = 116
ED448_SIGNATURE_SIZE_UNPADDED = 114
ED448_HASH_SIZE = 64

MLDSA_44_PUBLIC_KEY_SIZE = 1312
MLDSA_44_SIGNATURE_SIZE = 2420
MLDSA_44_HASH_SIZE = 32

MLDSA_65_PUBLIC_KEY_SIZE = 1952
MLDSA_65_SIGNATURE_SIZE = 3312
MLDSA_65_SIGNATURE_UNPADDED = 3309
MLDSA_65_HASH_SIZE = 48

MLDSA_87_PUBLIC_KEY_SIZE = 2592
MLDSA_87_SIGNATURE_SIZE = 4628
MLDSA_87_SIGNATURE_UNPADDED = 4627
MLDSA_87_HASH_SIZE = 64

RSA_3072_PUBLIC_KEY_SIZE = 384
RSA_3072_SIGNATURE_SIZE = 384
RSA_3072_HASH_SIZE = 32

RSA_4096_PUBLIC_KEY_SIZE = 512
RSA_4096_SIGNATURE_SIZE = 512
RSA_4096_HASH_SIZE = 32

SM2_PUBLIC_KEY_SIZE = 64
SM2_SIGNATURE_SIZE = 64
SM2_HASH_SIZE = 32


_CERTIFICATE_HEADER = struct.Struct("<BBBBBBHHHII16s16s")
_TOKEN_HEADER = struct.Struct("<BBBBI16s")
_TLV_HEADER = struct.Struct("<HHI")

_FULL_PERMISSIONS = b"\xff" * 16


def _check_16(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != 16:
        raise InvalidLengthError(f"{name} must be 16 bytes, got {len(value)}")
    return value


@dataclass
class CertificateHeader:
    """Fixed-size header at the start of every ADAC certificate."""

    SIZE: ClassVar[int] = _CERTIFICATE_HEADER.size

    format_version: AdacVersion = field(default_factory=AdacVersion)
    signature_type: KeyOptions = KeyOptions.ECDSA_P256_SHA256
    key_type: KeyOptions = KeyOptions.ECDSA_P256_SHA256
    role: CertificateRole = CertificateRole.LEAF
    usage: CertificateUsage = CertificateUsage.NEUTRAL
    policies: int = 0
    lifecycle: int = 0
    oem_constraint: int = 0
    extensions_bytes: int = 0
    soc_class: int = 0
    soc_id: bytes = bytes(16)
    permissions_mask: bytes = _FULL_PERMISSIONS

    def __post_init__(self) -> None:
        self.soc_id = _check_16("soc_id", self.soc_id)
        self.permissions_mask = _check_16("permissions_mask", self.permissions_mask)

    def to_bytes(self) -> bytes:
        """Serialise the header in its packed little-endian wire layout."""
        return _CERTIFICATE_HEADER.pack(
            self.format_version.major,
            self.format_version.minor,
            int(self.signature_type),
            int(self.key_type),
            int(self.role),
            int(self.usage),
            self.policies,
            self.lifecycle,
            self.oem_constraint,
            self.extensions_bytes,
            self.soc_class,
            self.soc_id,
            self.permissions_mask,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> CertificateHeader:
        """Parse and validate a header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise InvalidLengthError(
                f"certificate header needs {cls.SIZE} bytes, got {len(data)}"
            )
        (
            major,
            minor,
            signature_type,
            key_type,
            role,
            usage,
            policies,
            lifecycle,
            oem_constraint,
            extensions_bytes,
            soc_class,
            soc_id,
            permissions_mask,
        ) = _CERTIFICATE_HEADER.unpack_from(data)

        if key_type != signature_type:
            raise InconsistentCryptoError("key type and signature type differ")
        try:
            key = KeyOptions(key_type)
        except ValueError:
            raise InconsistentCryptoError(f"unknown key type {key_type:#04x}") from None
        try:
            parsed_role = CertificateRole(role)
        except ValueError:
            raise EncodingError("Invalid value for certificate role") from None
        try:
            parsed_usage = CertificateUsage(usage)
        except ValueError:
            raise EncodingError("Invalid value for certificate usage") from None

        return cls(
            format_version=AdacVersion(major, minor),
            signature_type=key,
            key_type=key,
            role=parsed_role,
            usage=parsed_usage,
            policies=policies,
            lifecycle=lifecycle,
            oem_constraint=oem_constraint,
            extensions_bytes=extensions_bytes,
            soc_class=soc_class,
            soc_id=soc_id,
            permissions_mask=permissions_mask,
        )


@dataclass
class TokenHeader:
    """Fixed-size header at the start of an ADAC authentication token."""

    SIZE: ClassVar[int] = _TOKEN_HEADER.size

    format_version: AdacVersion = field(default_factory=AdacVersion)
    signature_type: KeyOptions = KeyOptions.ECDSA_P256_SHA256
    reserved: int = 0
    extensions_bytes: int = 0
    requested_permissions: bytes = _FULL_PERMISSIONS

    def __post_init__(self) -> None:
        self.requested_permissions = _check_16(
            "requested_permissions", self.requested_permissions
        )

    def to_bytes(self) -> bytes:
        """Serialise the header in its packed little-endian wire layout."""
        return _TOKEN_HEADER.pack(
            self.format_version.major,
            self.format_version.minor,
            int(self.signature_type),
            self.reserved,
            self.extensions_bytes,
            self.requested_permissions,
        )


@dataclass(frozen=True)
class TlvHeader:
    """Header of a type-length-value record."""

    SIZE: ClassVar[int] = _TLV_HEADER.size

    type_id: int
    length: int
    reserved: int = 0

    def to_bytes(self) -> bytes:
        """Serialise as reserved, type and length in little-endian order."""
        return _TLV_HEADER.pack(self.reserved, self.type_id, self.length)


def tlv_wrap(type_id: int, content: bytes) -> bytes:
    """Wrap ``content`` in a TLV record, zero-padded to a multiple of four bytes."""
    content = bytes(content)
    header = TlvHeader(type_id=type_id, length=len(content))
    pad = -len(content) % 4
    return header.to_bytes() + content + bytes(pad)