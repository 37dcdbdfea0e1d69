"""Authenticated Debug Access Control certificates, TLV framing and token-session signing helpers."""

__version__ = "0.1.0"

__all__ = [
    "certificate",
    "ec_point",
    "model",
    "provider",
    "report",
    "sample_headers",
    "session",
    "token_private",
    "token_public",
]