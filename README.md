# adac

Building blocks for Authenticated Debug Access Control (ADAC): the binary
certificate and token headers, certificate signing, parsing and
verification, TLV framing, and helpers that sign and verify with keys held
in a PKCS#11-style token session.

Install with the test extra to run the test suite:

```
pip install -e ".[test]"
pytest
```

## Modules

- `adac.model` – the wire structures and errors:
  - `KeyOptions` (algorithm identifiers, e.g. `ECDSA_P256_SHA256 = 0x01`,
    `ED448_SHAKE256 = 0x06`, `MLDSA_87_SHA512 = 0x0D`),
    `CertificateRole` (`ROOT`, `INTERMEDIATE`, `LEAF`),
    `CertificateUsage` (`NEUTRAL`, `STANDARD`, `RMA`) and `AdacVersion`.
  - `CertificateHeader` with `to_bytes()` and `from_bytes()`, and
    `TokenHeader` and `TlvHeader` with `to_bytes()`; all use a packed
    little-endian layout and expose their size as `SIZE`.
  - `tlv_wrap(type_id, content)`.
  - The size constants for every algorithm (`ECDSA_P256_PUBLIC_KEY_SIZE`,
    `ED448_SIGNATURE_SIZE_UNPADDED`, …).
  - The error hierarchy rooted at `AdacError`: `InvalidLengthError`,
    `InconsistentCryptoError`, `InconsistentVersionError`,
    `InputOutputError`, `UnsupportedAlgorithmError`, `CryptoProviderError`,
    `EncodingError`, `InvalidSignatureError`.
- `adac.provider` – `CryptoProvider`, the abstract interface a backend
  implements (`verify`, `hash`, `sign`, `load_key`), and `KeyFormat`
  (`PKCS8`, `KEY_ID`).
- `adac.certificate` – `AdacCertificate` and `sizes_from_crypto()`.
- `adac.session` – `Session`, the abstract interface to a logged-in token
  (`digest`, `sign`, `verify`, `get_attribute`, `update_attributes`,
  `create_object`, `destroy_object`), the `Mechanism` numbers,
  `MechanismInfo`, and `hash_data()`.
- `adac.ec_point` – `EcKeyType`, `ec_key_type()` and
  `sec1_from_ec_point()`.
- `adac.token_public` – `verify()`, `ec_verify()`, `rsa_verify()`,
  `rsa_import_public_key()` and `rsa_load_public_key()`.
- `adac.token_private` – `sign()`, `kid_from_spki()` and
  `label_keypair()`.
- `adac.sample_headers` – `chain_certificate_header()`,
  `root_certificate_header()` and `hex_to_le_bytes()`.
- `adac.report` – `StepResult`, `TEST_STEPS`, `mechanism_report()`,
  `format_step()` and `format_summary()`.

## Certificates

A certificate is a fixed-size `CertificateHeader`, the subject public key,
the extensions hash, the signature, and then the extensions. The sizes
depend on the algorithm:

```python
from adac.certificate import sizes_from_crypto
from adac.model import KeyOptions

pubkey_size, hash_size, sig_size = sizes_from_crypto(KeyOptions.ECDSA_P256_SHA256)
# (64, 32, 64)
```

`sizes_from_crypto()` raises `UnsupportedAlgorithmError` for `CMAC_AES`
and `HMAC_SHA256`.

Signing needs an object that implements `CryptoProvider`; the package
defines the interface but supplies no implementation, so subclass it with
whatever backend holds your keys.

```python
from adac.certificate import AdacCertificate
from adac.model import KeyOptions
from adac.sample_headers import chain_certificate_header

key_type = KeyOptions.ECDSA_P256_SHA256
header = chain_certificate_header(key_type, 0)   # root of a four-level test chain

certificate = AdacCertificate.sign(key_type, header, public_key, None, provider)
blob = certificate.to_bytes()

parsed = AdacCertificate.from_bytes(blob)
parsed.verify(parsed.public_key, provider)       # raises AdacError on failure
```

`AdacCertificate.sign()` checks that the header's key and signature types
match `key_type` and that the public key has the right length. With a
version 1.0 header it rejects P-384 and ML-DSA keys and any non-zero
`policies`. When extensions are given, their length goes into the header
and their hash (from `provider.hash`) into the certificate; otherwise the
hash field is all zeros.

`AdacCertificate.from_bytes()` checks that key and signature types agree
and are known, that role and usage hold valid values, and that the total
length matches the header exactly.

The parts of a certificate are available as properties: `header`,
`key_type`, `public_key`, `extensions_hash`, `signature`, `tbs` (the
signed part: header, public key and extensions hash) and `extensions`.
`bytes(certificate)` and `len(certificate)` work as well.

`verify()` first checks the extensions hash (all zeros when there are no
extensions, otherwise the provider's hash of the extensions) and raises
`EncodingError` if it is wrong, then asks the provider to verify the
signature over `tbs`.

## TLV framing

```python
from adac.model import tlv_wrap

framed = tlv_wrap(0x201, certificate.to_bytes())
```

The result starts with an 8-byte little-endian header (reserved, type,
length) and is zero-padded to a multiple of four bytes.

## Token sessions

`Session` describes what the helpers need from a logged-in token. Object
handles are integers and attributes are named by the string constants in
`adac.session` (`LABEL`, `ID`, `EC_POINT`, `MODULUS`, …).

- `hash_data(session, key_type, data)` picks SHA-256, SHA-384 or SHA-512
  on the token according to the key type; for Ed448 it computes a 64-byte
  SHAKE-256 digest locally.
- `token_private.sign()` signs pre-hashed data with ECDSA, Ed25519ph or
  Ed448ph, or the whole message with SHA-256 RSA-PSS. Ed448 signatures get
  two zero bytes appended, to the 116-byte ADAC size.
- `token_public.verify()` dispatches to `ec_verify()` (Ed448 signatures
  are cut back to 114 bytes) or `rsa_verify()`.
- `rsa_import_public_key()` creates a session public key from a raw
  modulus with exponent 65537; `rsa_load_public_key()` reads modulus and
  exponent back, checks the modulus size (3072 or 4096 bits) and returns a
  DER SubjectPublicKeyInfo.
- `kid_from_spki()` returns the SHA-256 of an SPKI as lower-case hex and
  as bytes; `label_keypair()` writes that identifier into the label and id
  attributes of both keys of a pair.
- `sec1_from_ec_point()` unwraps a DER OCTET STRING around an EC point;
  EdDSA points are unwrapped only when longer than a raw key.

## Reports

`mechanism_report(mechanisms, infos)` renders a box-drawn table showing
whether a token offers ECDSA, RSA-PSS, EdDSA and ML-DSA, whether it can
sign and verify with them, and whether its key-size range covers each ADAC
algorithm. `StepResult`, `format_step()` and `format_summary()` format the
progress and final lines of a self-test whose steps are listed in
`TEST_STEPS`.

## What this package does not do

- It contains no `CryptoProvider` or `Session` implementation: it does
  not load a PKCS#11 module, open a token, or sign with software keys.
  Callers supply those objects.
- It has no command-line tool; `adac.report` only produces text.
- It builds `TokenHeader` bytes but does not sign or verify
  authentication tokens.
- It does not read or write certificate chains or keys from files or PEM.

## Errors

Every failure raises a subclass of `adac.model.AdacError`, so callers can
catch the whole family or a single case such as `InvalidLengthError`. The
one exception is `sample_headers`, which raises `ValueError` for a bad
chain level or hex string.