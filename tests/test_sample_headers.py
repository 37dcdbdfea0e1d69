import pytest

from adac.certificate import AdacCertificate
from adac.model import (
    AdacVersion,
    CertificateHeader,
    CertificateRole,
    CertificateUsage,
    InconsistentVersionError,
    KeyOptions,
)
from adac.provider import CryptoProvider
from adac.sample_headers import (
    chain_certificate_header,
    hex_to_le_bytes,
    root_certificate_header,
)


class ZeroProvider(CryptoProvider):
    def verify(self, key_type, public_key, data, signature):
        return None

    def hash(self, key_type, data):
        return bytes(48)

    def sign(self, key_type, data):
        return bytes(96)

    def load_key(self, key_type, key_format, key):
        return bytes(96)


def test_chain_root_level():
    header = chain_certificate_header(KeyOptions.ECDSA_P256_SHA256, 0)
    assert header.role is CertificateRole.ROOT
    assert header.permissions_mask == b"\xff" * 16
    assert header.usage is CertificateUsage.STANDARD
    assert header.format_version == AdacVersion(1, 0)


def test_chain_intermediate_soc_class():
    header = chain_certificate_header(KeyOptions.RSA_3072_SHA256, 2)
    assert header.role is CertificateRole.INTERMEDIATE
    assert header.soc_class == 0x12345678
    assert header.key_type is header.signature_type is KeyOptions.RSA_3072_SHA256


def test_chain_leaf_soc_id():
    header = chain_certificate_header(KeyOptions.ED25519_SHA512, 3)
    assert header.role is CertificateRole.LEAF
    assert header.soc_id == bytes(range(16))
    assert header.permissions_mask[-4:] == b"\xff" * 4
    assert header.permissions_mask[:12] == bytes(12)


def test_chain_permissions_narrow_down_the_chain():
    masks = [
        int.from_bytes(chain_certificate_header(KeyOptions.ECDSA_P256_SHA256, level).permissions_mask, "big")
        for level in range(4)
    ]
    for parent, child in zip(masks, masks[1:]):
        assert child & parent == child


@pytest.mark.parametrize(
    "key_type",
    [
        KeyOptions.ECDSA_P384_SHA384,
        KeyOptions.MLDSA_44_SHA256,
        KeyOptions.MLDSA_65_SHA384,
        KeyOptions.MLDSA_87_SHA512,
    ],
)
def test_newer_algorithms_use_version_1_1(key_type):
    assert chain_certificate_header(key_type, 1).format_version == AdacVersion(1, 1)
    assert root_certificate_header(key_type)[0].format_version == AdacVersion(1, 1)


@pytest.mark.parametrize("level", [-1, 4])
def test_chain_level_out_of_range(level):
    with pytest.raises(ValueError):
        chain_certificate_header(KeyOptions.ECDSA_P256_SHA256, level)


def test_root_header_with_extensions():
    header, extensions = root_certificate_header(KeyOptions.ECDSA_P256_SHA256)
    assert len(extensions) == 48
    assert header.extensions_bytes == len(extensions)
    assert header.lifecycle == 0x3000
    assert header.soc_class == 0x12345678
    assert header.role is CertificateRole.ROOT
    assert extensions[8:24] == bytes(range(0x3F, 0x2F, -1))
    assert extensions[32:] == bytes(range(0x40, 0x50))


def test_root_header_round_trip():
    header, _ = root_certificate_header(KeyOptions.ED448_SHAKE256)
    assert CertificateHeader.from_bytes(header.to_bytes()) == header


def test_chain_header_signs_p384_certificate():
    header = chain_certificate_header(KeyOptions.ECDSA_P384_SHA384, 2)
    certificate = AdacCertificate.sign(
        KeyOptions.ECDSA_P384_SHA384, header, bytes(96), None, ZeroProvider()
    )
    assert certificate.header == header
    assert certificate.header.soc_class == 0x12345678


def test_p384_header_rejected_at_version_1_0():
    header = chain_certificate_header(KeyOptions.ECDSA_P384_SHA384, 0)
    header.format_version = AdacVersion(1, 0)
    with pytest.raises(InconsistentVersionError):
        AdacCertificate.sign(
            KeyOptions.ECDSA_P384_SHA384, header, bytes(96), None, ZeroProvider()
        )


def test_hex_to_le_bytes_permissions_mask():
    result = hex_to_le_bytes("0x0000000000000000FFFFFFFF00000000")
    assert result == b"\x00" * 4 + b"\xff" * 4 + b"\x00" * 8


@pytest.mark.parametrize(
    "text",
    [
        "0x00112233445566778899aabb00000000",
        "0x8000000000000000FFFFFFFF00000000",
        "0xBA9876543210BA987654321000000000",
    ],
)
def test_hex_to_le_bytes_round_trip(text):
    result = hex_to_le_bytes(text)
    assert len(result) == 16
    assert int.from_bytes(result, "little") == int(text, 16)


@pytest.mark.parametrize(
    "text",
    [
        "00112233445566778899aabb00000000",
        "0x0011",
        "0x00112233445566778899aabb0000000000",
        "0xzz112233445566778899aabb00000000",
    ],
)
def test_hex_to_le_bytes_rejects_bad_input(text):
    with pytest.raises(ValueError):
        hex_to_le_bytes(text)