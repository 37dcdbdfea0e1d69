import dataclasses
import hashlib

import pytest

from adac.model import CryptoProviderError, KeyOptions, UnsupportedAlgorithmError
from adac.session import Mechanism, MechanismInfo, Session, hash_data

_ALGORITHMS = {
    Mechanism.SHA256: "sha256",
    Mechanism.SHA384: "sha384",
    Mechanism.SHA512: "sha512",
}


class FakeSession(Session):
    def __init__(self):
        self.calls = []
        self.objects = {}
        self._next = 1

    def digest(self, mechanism, data):
        self.calls.append(mechanism)
        try:
            return hashlib.new(_ALGORITHMS[mechanism], data).digest()
        except KeyError:
            raise CryptoProviderError("mechanism invalid") from None

    def sign(self, mechanism, handle, data):
        raise CryptoProviderError("signing not available")

    def verify(self, mechanism, handle, data, signature):
        raise CryptoProviderError("verification not available")

    def get_attribute(self, handle, attribute):
        try:
            return self.objects[handle][attribute]
        except KeyError:
            raise CryptoProviderError("attribute not found") from None

    def update_attributes(self, handle, attributes):
        self.objects[handle].update(attributes)

    def create_object(self, template):
        handle = self._next
        self._next += 1
        self.objects[handle] = dict(template)
        return handle

    def destroy_object(self, handle):
        del self.objects[handle]


class BrokenSession(FakeSession):
    def digest(self, mechanism, data):
        raise CryptoProviderError("token removed")


@pytest.mark.parametrize(
    "key_type, mechanism, size",
    [
        (KeyOptions.ECDSA_P256_SHA256, Mechanism.SHA256, 32),
        (KeyOptions.RSA_3072_SHA256, Mechanism.SHA256, 32),
        (KeyOptions.RSA_4096_SHA256, Mechanism.SHA256, 32),
        (KeyOptions.ECDSA_P384_SHA384, Mechanism.SHA384, 48),
        (KeyOptions.ECDSA_P521_SHA512, Mechanism.SHA512, 64),
        (KeyOptions.ED25519_SHA512, Mechanism.SHA512, 64),
    ],
)
def test_hash_uses_token_digest(key_type, mechanism, size):
    session = FakeSession()
    data = b"adac challenge"
    digest = hash_data(session, key_type, data)
    assert session.calls == [mechanism]
    assert len(digest) == size
    assert digest == hashlib.new(_ALGORITHMS[mechanism], data).digest()


def test_ed448_hash_is_local_shake256():
    session = FakeSession()
    data = bytes(128)
    digest = hash_data(session, KeyOptions.ED448_SHAKE256, data)
    assert session.calls == []
    assert len(digest) == 64
    assert digest == hashlib.shake_256(data).digest(64)


def test_hash_differs_for_different_data():
    session = FakeSession()
    first = hash_data(session, KeyOptions.ECDSA_P256_SHA256, b"a")
    second = hash_data(session, KeyOptions.ECDSA_P256_SHA256, b"b")
    assert first != second
    assert len(first) == len(second) == 32


@pytest.mark.parametrize(
    "key_type",
    [
        KeyOptions.SM_SM2_SM3,
        KeyOptions.CMAC_AES,
        KeyOptions.HMAC_SHA256,
        KeyOptions.MLDSA_44_SHA256,
        KeyOptions.MLDSA_65_SHA384,
        KeyOptions.MLDSA_87_SHA512,
    ],
)
def test_hash_unsupported(key_type):
    session = FakeSession()
    with pytest.raises(UnsupportedAlgorithmError):
        hash_data(session, key_type, b"data")
    assert session.calls == []


def test_hash_propagates_token_failure():
    with pytest.raises(CryptoProviderError, match="token removed"):
        hash_data(BrokenSession(), KeyOptions.ECDSA_P384_SHA384, b"data")


def test_session_is_abstract():
    with pytest.raises(TypeError):
        Session()


def test_mechanism_info_is_immutable():
    info = MechanismInfo(min_key_size=256, max_key_size=521, sign=True, verify=False)
    with pytest.raises(dataclasses.FrozenInstanceError):
        info.sign = False
    assert info.max_key_size == 521