"""Text reports for token capability checks and self-test runs."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass

from adac.model import AdacError, CryptoProviderError
from adac.session import Mechanism, MechanismInfo

CHECK_MARK = "\u2705\ufe0f"
CROSS_MARK = "\u274c"
SUPPORTED_MARK = "\u2705"

KEY = "\U0001f511"
LOCKED_WITH_KEY = "\U0001f510"
UNLOCKED = "\U0001f513"
WASTEBASKET = "\U0001f5d1\ufe0f"
FLOPPY_DISK = "\U0001f4be"
DOWN_ARROW = "\u2b07\ufe0f"
MAGNIFYING_GLASS = "\U0001f50e"

# Steps of the token self-test, in the order they run.
TEST_STEPS: tuple[tuple[str, str], ...] = (
    (KEY, "Key generation"),
    (LOCKED_WITH_KEY, "Sign"),
    (UNLOCKED, "Verify"),
    (WASTEBASKET, "Delete keypair"),
    (FLOPPY_DISK, "Load keypair"),
    (DOWN_ARROW, "Import keypair"),
    (LOCKED_WITH_KEY, "Sign"),
    (UNLOCKED, "Verify"),
    (WASTEBASKET, "Delete keypair"),
    (MAGNIFYING_GLASS, "Verify certificate"),
)

# Mechanism families checked on a token, with the key sizes ADAC needs from each.
_CHECKS: tuple[tuple[str, int, tuple[tuple[str, int], ...]], ...] = (
    (
        "ECDSA",
        Mechanism.ECDSA,
        (("EcdsaP256Sha256", 256), ("EcdsaP384Sha384", 384), ("EcdsaP521Sha512", 521)),
    ),
    (
        "RSA-PSS",
        Mechanism.RSA_PKCS_PSS,
        (("Rsa3072Sha256", 3072), ("Rsa4096Sha256", 4096)),
    ),
    (
        "EDDSA",
        Mechanism.EDDSA,
        (("Ed25519Sha512", 256), ("Ed448Shake256", 448)),
    ),
    ("ML-DSA", Mechanism.ML_DSA, ()),
)

_TOP = "\u250f" + "\u2501" * 10 + "\u2533" + "\u2501" * 21 + "\u2513"
_SEPARATOR = "\u2523" + "\u2501" * 10 + "\u254b" + "\u2501" * 21 + "\u252b"
_BOTTOM = "\u2517" + "\u2501" * 10 + "\u253b" + "\u2501" * 21 + "\u251b"
_BAR = "\u2503"


@dataclass
class StepResult:
    """Outcome of one step of a token self-test."""

    icon: str
    name: str
    ok: bool = False
    error: AdacError | None = None


def _mark(flag: bool) -> str:
    return SUPPORTED_MARK if flag else CROSS_MARK


def _family_lines(
    name: str,
    mechanism: int,
    sizes: Iterable[tuple[str, int]],
    mechanisms: Collection[int],
    infos: Mapping[int, MechanismInfo],
) -> list[str]:
    if mechanism not in mechanisms:
        return [f"{_BAR} {name:<7}  {_BAR} {CROSS_MARK} Not supported    {_BAR}"]

    lines = [f"{_BAR} {name:<7}  {_BAR} {SUPPORTED_MARK} Supported        {_BAR}"]
    info = infos.get(mechanism)
    if info is None:
        return lines
    lines.append(
        f"{_BAR}          {_BAR} Sign: {_mark(info.sign)} "
        f"Verify: {_mark(info.verify)} {_BAR}"
    )
    for label, bits in sizes:
        fits = info.max_key_size >= bits - 1 and info.min_key_size <= bits + 1
        lines.append(f"{_BAR}          {_BAR} {label:>15}: {_mark(fits)} {_BAR}")
    return lines


def mechanism_report(
    mechanisms: Iterable[int], infos: Mapping[int, MechanismInfo]
) -> str:
    """Render a table of which ADAC mechanisms and key sizes a token supports.

    ``mechanisms`` lists the mechanism numbers the token offers; ``infos``
    maps a mechanism number to the capabilities the token reports for it.
    """
    available = frozenset(int(m) for m in mechanisms)
    details = {int(k): v for k, v in infos.items()}
    blocks = [
        _family_lines(name, mechanism, sizes, available, details)
        for name, mechanism, sizes in _CHECKS
    ]

    lines = ["", _TOP]
    for index, block in enumerate(blocks):
        if index:
            lines.append(_SEPARATOR)
        lines.extend(block)
    lines.extend([_BOTTOM, ""])
    return "\n".join(lines)


def format_step(step: StepResult) -> str:
    """One-line progress message for a finished step."""
    mark = CHECK_MARK if step.ok else CROSS_MARK
    return f"{step.icon} {mark}: {step.name}"


def _describe(error: AdacError) -> str:
    if isinstance(error, CryptoProviderError):
        return str(error)
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def format_summary(steps: Iterable[StepResult]) -> str:
    """Final report listing every step with its outcome and any error."""
    lines = []
    for step in steps:
        if step.ok:
            lines.append(f"- {CHECK_MARK} {step.icon} {step.name}")
        elif step.error is not None:
            lines.append(
                f"- {CROSS_MARK} {step.icon} {step.name}: {_describe(step.error)}"
            )
        else:
            lines.append(f"- {CROSS_MARK} {step.icon} {step.name}")
    return "\n".join(lines)