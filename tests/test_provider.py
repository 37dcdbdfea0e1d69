import hashlib

import pytest

from adac.certificate import AdacCertificate, sizes_from_crypto
from adac.model import CertificateHeader, InvalidSignatureError, KeyOptions
from adac.provider import CryptoProvider, KeyFormat


class ShakeProvider(CryptoProvider):
    def __init__(self):
        self.loaded = None

    def verify(self, key_type, public_key, data, signature):
        if self.sign(key_type, data) != signature:
            raise InvalidSignatureError("mismatch")

    def hash(self, key_type, data):
        _, hash_size, _ = sizes_from_crypto(key_type)
        return hashlib.shake_256(data).digest(hash_size)

    def sign(self, key_type, data):
        _, _, sig_size = sizes_from_crypto(key_type)
        return hashlib.shake_256(b"sig" + data).digest(sig_size)

    def load_key(self, key_type, key_format, key):
        self.loaded = (key_type, key_format)
        return bytes(key)


def test_abstract_provider_cannot_be_instantiated():
    with pytest.raises(TypeError):
        CryptoProvider()


def test_incomplete_provider_cannot_be_instantiated():
    class HashOnly(CryptoProvider):
        def hash(self, key_type, data):
            _, hash_size, _ = sizes_from_crypto(key_type)
            return hashlib.shake_256(data).digest(hash_size)

    with pytest.raises(TypeError):
        HashOnly()

    class Completed(HashOnly):
        def verify(self, key_type, public_key, data, signature):
            if self.sign(key_type, data) != signature:
                raise InvalidSignatureError("mismatch")

        def sign(self, key_type, data):
            _, _, sig_size = sizes_from_crypto(key_type)
            return hashlib.shake_256(b"sig" + data).digest(sig_size)

        def load_key(self, key_type, key_format, key):
            return bytes(key)

    provider = Completed()
    header = CertificateHeader(
        key_type=KeyOptions.ED25519_SHA512, signature_type=KeyOptions.ED25519_SHA512
    )
    certificate = AdacCertificate.sign(
        KeyOptions.ED25519_SHA512, header, bytes(32), None, provider
    )
    assert len(certificate.to_bytes()) == 52 + 32 + 64 + 64
    certificate.verify(bytes(32), provider)


def test_key_format_lookup_by_value():
    assert KeyFormat("pkcs8") is KeyFormat.PKCS8
    assert KeyFormat("key_id") is KeyFormat.KEY_ID
    with pytest.raises(ValueError):
        KeyFormat("pem")


def test_complete_provider_drives_certificate_signing():
    provider = ShakeProvider()
    public_key = provider.load_key(KeyOptions.ED25519_SHA512, KeyFormat.PKCS8, bytes(32))
    assert provider.loaded == (KeyOptions.ED25519_SHA512, KeyFormat.PKCS8)
    header = CertificateHeader(
        key_type=KeyOptions.ED25519_SHA512, signature_type=KeyOptions.ED25519_SHA512
    )
    certificate = AdacCertificate.sign(
        KeyOptions.ED25519_SHA512, header, public_key, b"ext", provider
    )
    assert certificate.extensions_hash == provider.hash(KeyOptions.ED25519_SHA512, b"ext")
    certificate.verify(public_key, provider)
    assert certificate.signature == provider.sign(
        KeyOptions.ED25519_SHA512, certificate.tbs
    )