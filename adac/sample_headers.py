"""Reference certificate headers for building and checking test chains."""

from __future__ import annotations

from adac.model import (
    AdacVersion,
    CertificateHeader,
    CertificateRole,
    CertificateUsage,
    KeyOptions,
)

_VERSION_1_1_TYPES = frozenset(
    {
        KeyOptions.ECDSA_P384_SHA384,
        KeyOptions.MLDSA_44_SHA256,
        KeyOptions.MLDSA_65_SHA384,
        KeyOptions.MLDSA_87_SHA512,
    }
)

_CHAIN_PERMISSIONS = (
    b"\xff" * 16,
    b"\x00" * 8 + b"\xff" * 8,
    b"\x00" * 4 + b"\xff" * 4 + b"\x00" * 4 + b"\xff" * 4,
    b"\x00" * 12 + b"\xff" * 4,
)
_CHAIN_ROLES = (
    CertificateRole.ROOT,
    CertificateRole.INTERMEDIATE,
    CertificateRole.INTERMEDIATE,
    CertificateRole.LEAF,
)
_CHAIN_SOC_IDS = (bytes(16), bytes(16), bytes(16), bytes(range(16)))
_CHAIN_SOC_CLASSES = (0, 0, 0x12345678, 0)

_ROOT_PERMISSIONS = bytes.fromhex("2f2e2d2c2b2a29282726252423222120")
_ROOT_SOC_ID = bytes.fromhex("1f1e1d1c1b1a19181716151413121110")
_ROOT_SOC_CLASS = 0x12345678
_ROOT_LIFECYCLE = 0x3000
_ROOT_EXTENSIONS = bytes.fromhex(
    "00000080 10000000 3f3e3d3c3b3a39383736353433323130"
    " 00000180 10000000 404142434445464748494a4b4c4d4e4f"
)


def _format_version(key_type: KeyOptions) -> AdacVersion:
    return AdacVersion(1, 1) if key_type in _VERSION_1_1_TYPES else AdacVersion(1, 0)


def chain_certificate_header(key_type: KeyOptions, level: int) -> CertificateHeader:
    """Header for the certificate at ``level`` (0 = root, 3 = leaf) of a test chain."""
    if not 0 <= level <= 3:
        raise ValueError(f"level {level} should be between 0 and 3")
    return CertificateHeader(
        format_version=_format_version(key_type),
        key_type=key_type,
        signature_type=key_type,
        usage=CertificateUsage.STANDARD,
        role=_CHAIN_ROLES[level],
        permissions_mask=_CHAIN_PERMISSIONS[level],
        soc_id=_CHAIN_SOC_IDS[level],
        soc_class=_CHAIN_SOC_CLASSES[level],
    )


def root_certificate_header(key_type: KeyOptions) -> tuple[CertificateHeader, bytes]:
    """Header and extensions for a standalone root certificate with extensions."""
    header = CertificateHeader(
        format_version=_format_version(key_type),
        key_type=key_type,
        signature_type=key_type,
        usage=CertificateUsage.STANDARD,
        role=CertificateRole.ROOT,
        permissions_mask=_ROOT_PERMISSIONS,
        soc_id=_ROOT_SOC_ID,
        soc_class=_ROOT_SOC_CLASS,
        extensions_bytes=len(_ROOT_EXTENSIONS),
        lifecycle=_ROOT_LIFECYCLE,
    )
    return header, _ROOT_EXTENSIONS


def hex_to_le_bytes(text: str) -> bytes:
    """Turn a ``0x``-prefixed 128-bit hex number into its 16 little-endian bytes."""
    if not text.startswith("0x"):
        raise ValueError(f"{text!r} does not start with 0x")
    raw = bytes.fromhex(text[2:])
    if len(raw) != 16:
        raise ValueError(f"{text!r} is not a 128-bit value")
    return int.from_bytes(raw, "big").to_bytes(16, "little")