"""ADAC certificates: signing, parsing and verification."""

from __future__ import annotations

import dataclasses

from adac import model
from adac.model import (
    AdacVersion,
    CertificateHeader,
    EncodingError,
    InconsistentCryptoError,
    InconsistentVersionError,
    InvalidLengthError,
    KeyOptions,
    UnsupportedAlgorithmError,
)
from adac.provider import CryptoProvider

_SIZES: dict[KeyOptions, tuple[int, int, int]] = {
    KeyOptions.ECDSA_P256_SHA256: (
        model.ECDSA_P256_PUBLIC_KEY_SIZE,
        model.ECDSA_P256_HASH_SIZE,
        model.ECDSA_P256_SIGNATURE_SIZE,
    ),
    KeyOptions.ECDSA_P384_SHA384: (
        model.ECDSA_P384_PUBLIC_KEY_SIZE,
        model.ECDSA_P384_HASH_SIZE,
        model.ECDSA_P384_SIGNATURE_SIZE,
    ),
    KeyOptions.ECDSA_P521_SHA512: (
        model.ECDSA_P521_PUBLIC_KEY_SIZE,
        model.ECDSA_P521_HASH_SIZE,
        model.ECDSA_P521_SIGNATURE_SIZE,
    ),
    KeyOptions.ED25519_SHA512: (
        model.ED25519_PUBLIC_KEY_SIZE,
        model.ED25519_HASH_SIZE,
        model.ED25519_SIGNATURE_SIZE,
    ),
    KeyOptions.ED448_SHAKE256: (
        model.ED448_PUBLIC_KEY_SIZE,
        model.ED448_HASH_SIZE,
        model.ED448_SIGNATURE_SIZE,
    ),
    KeyOptions.MLDSA_44_SHA256: (
        model.MLDSA_44_PUBLIC_KEY_SIZE,
        model.MLDSA_44_HASH_SIZE,
        model.MLDSA_44_SIGNATURE_SIZE,
    ),
    KeyOptions.MLDSA_65_SHA384: (
        model.MLDSA_65_PUBLIC_KEY_SIZE,
        model.MLDSA_65_HASH_SIZE,
        model.MLDSA_65_SIGNATURE_SIZE,
    ),
    KeyOptions.MLDSA_87_SHA512: (
        model.MLDSA_87_PUBLIC_KEY_SIZE,
        model.MLDSA_87_HASH_SIZE,
        model.MLDSA_87_SIGNATURE_SIZE,
    ),
    KeyOptions.RSA_3072_SHA256: (
        model.RSA_3072_PUBLIC_KEY_SIZE,
        model.RSA_3072_HASH_SIZE,
        model.RSA_3072_SIGNATURE_SIZE,
    ),
    KeyOptions.RSA_4096_SHA256: (
        model.RSA_4096_PUBLIC_KEY_SIZE,
        model.RSA_4096_HASH_SIZE,
        model.RSA_4096_SIGNATURE_SIZE,
    ),
    KeyOptions.SM_SM2_SM3: (
        model.SM2_PUBLIC_KEY_SIZE,
        model.SM2_HASH_SIZE,
        model.SM2_SIGNATURE_SIZE,
    ),
}

# Algorithms that format version 1.0 does not allow.
_NEWER_THAN_1_0 = frozenset(
    {
        KeyOptions.ECDSA_P384_SHA384,
        KeyOptions.MLDSA_44_SHA256,
        KeyOptions.MLDSA_65_SHA384,
        KeyOptions.MLDSA_87_SHA512,
    }
)


def sizes_from_crypto(key_type: KeyOptions) -> tuple[int, int, int]:
    """Return (public key, hash, signature) sizes in bytes for ``key_type``."""
    try:
        return _SIZES[key_type]
    except KeyError:
        raise UnsupportedAlgorithmError(f"unsupported key type {key_type!r}") from None


class AdacCertificate:
    """A parsed ADAC certificate backed by its raw bytes."""

    def __init__(
        self,
        raw: bytes,
        header: CertificateHeader,
        pubkey_size: int,
        hash_size: int,
        sig_size: int,
    ) -> None:
        self._raw = raw
        self._header = header
        self._pubkey_size = pubkey_size
        self._hash_size = hash_size
        self._sig_size = sig_size

    @classmethod
    def from_bytes(cls, certificate: bytes) -> AdacCertificate:
        """Parse and validate a certificate."""
        raw = bytes(certificate)
        header = CertificateHeader.from_bytes(raw)
        pubkey_size, hash_size, sig_size = sizes_from_crypto(header.key_type)
        fixed = CertificateHeader.SIZE + pubkey_size + hash_size + sig_size
        if fixed + header.extensions_bytes != len(raw):
            raise InvalidLengthError(
                f"certificate length {len(raw)} does not match "
                f"expected {fixed + header.extensions_bytes}"
            )
        return cls(raw, header, pubkey_size, hash_size, sig_size)

    def to_bytes(self) -> bytes:
        """Return the certificate's raw bytes."""
        return self._raw

    def __bytes__(self) -> bytes:
        return self._raw

    def __len__(self) -> int:
        return len(self._raw)

    @classmethod
    def sign(
        cls,
        key_type: KeyOptions,
        header: CertificateHeader,
        public_key: bytes,
        extensions: bytes | None,
        provider: CryptoProvider,
    ) -> AdacCertificate:
        """Build and sign a certificate for ``public_key`` using ``provider``."""
        pubkey_size, hash_size, _ = sizes_from_crypto(key_type)

        if key_type != header.key_type or key_type != header.signature_type:
            raise InconsistentCryptoError("key type does not match header")
        if len(public_key) != pubkey_size:
            raise InvalidLengthError(
                f"public key must be {pubkey_size} bytes, got {len(public_key)}"
            )
        if header.format_version == AdacVersion(1, 0):
            if key_type in _NEWER_THAN_1_0:
                raise InconsistentVersionError(
                    f"{key_type.name} requires format version 1.1 or later"
                )
            if header.policies != 0:
                raise InconsistentVersionError("policies must be zero in version 1.0")

        if extensions is not None:
            extensions = bytes(extensions)
            header = dataclasses.replace(header, extensions_bytes=len(extensions))
            extension_hash = provider.hash(key_type, extensions)
        else:
            header = dataclasses.replace(header, extensions_bytes=0)
            extension_hash = bytes(hash_size)

        if len(extension_hash) != hash_size:
            raise InvalidLengthError(
                f"extensions hash must be {hash_size} bytes, got {len(extension_hash)}"
            )

        tbs = header.to_bytes() + bytes(public_key) + bytes(extension_hash)
        signature = provider.sign(key_type, tbs)
        return cls.from_bytes(tbs + bytes(signature) + (extensions or b""))

    @property
    def key_type(self) -> KeyOptions:
        """Algorithm of the certified key."""
        return self._header.key_type

    @property
    def header(self) -> CertificateHeader:
        """The parsed certificate header."""
        return self._header

    @property
    def public_key(self) -> bytes:
        """The certified public key."""
        start = CertificateHeader.SIZE
        return self._raw[start:start + self._pubkey_size]

    @property
    def extensions_hash(self) -> bytes:
        """Hash of the extensions, or zeros when there are none."""
        start = CertificateHeader.SIZE + self._pubkey_size
        return self._raw[start:start + self._hash_size]

    @property
    def signature(self) -> bytes:
        """Signature over :attr:`tbs`."""
        start = CertificateHeader.SIZE + self._pubkey_size + self._hash_size
        return self._raw[start:start + self._sig_size]

    @property
    def tbs(self) -> bytes:
        """The signed portion: header, public key and extensions hash."""
        return self._raw[: CertificateHeader.SIZE + self._pubkey_size + self._hash_size]

    @property
    def extensions(self) -> bytes:
        """Raw extension data that follows the signature."""
        start = (
            CertificateHeader.SIZE + self._pubkey_size + self._hash_size + self._sig_size
        )
        return self._raw[start:start + self._header.extensions_bytes]

    def verify(self, public_key: bytes, provider: CryptoProvider) -> None:
        """Check the extensions hash and the signature made with ``public_key``."""
        if self._header.extensions_bytes == 0:
            if any(self.extensions_hash):
                raise EncodingError("Invalid extensions hash")
        elif provider.hash(self.key_type, self.extensions) != self.extensions_hash:
            raise EncodingError("Invalid extensions hash")

        provider.verify(self.key_type, public_key, self.tbs, self.signature)