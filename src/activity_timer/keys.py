from __future__ import annotations

"""API token storage & retrieval.

Strategy:
 - Try OS keyring via the 'keyring' package.
 - If the keyring backend fails, fall back to a XOR-obfuscated file in the
   data dir (NOT encryption, only keeps the token out of plain text).
 - Redaction helper for logs.
"""

import base64
import logging
from pathlib import Path
from typing import Optional

import keyring
from keyring.errors import KeyringError

SERVICE_NAME = "activity_timer_api"
ACCOUNT = "default"
FALLBACK_FILENAME = "api.token"
_KEY = b"activity-timer-xor"
_log = logging.getLogger(__name__)


def save_token(base_dir: Path, token: str) -> None:
    try:
        keyring.set_password(SERVICE_NAME, ACCOUNT, token)
        _log.info("api token stored in keyring")
        return
    except KeyringError:
        _log.warning("keyring storage failed; falling back to file")
    base_dir.mkdir(parents=True, exist_ok=True)
    path = base_dir / FALLBACK_FILENAME
    path.write_bytes(_xor_obfuscate(token.encode("utf-8")))
    _log.info("api token stored in fallback file", extra={"_json_location": "fallback"})


def load_token(base_dir: Path) -> Optional[str]:
    try:
        v = keyring.get_password(SERVICE_NAME, ACCOUNT)
        if v:
            return v
    except KeyringError:
        _log.warning("keyring lookup failed; trying fallback file")
    path = base_dir / FALLBACK_FILENAME
    if not path.exists():
        return None
    try:
        return _xor_deobfuscate(path.read_bytes()).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        _log.warning("fallback token file unreadable", extra={"_json_path": str(path)})
        return None


def redact(value: str | None) -> str:
    if not value:
        return "<none>"
    if len(value) <= 6:
        return "***"
    return value[:3] + "***" + value[-3:]


def _xor(data: bytes) -> bytes:
    return bytes([b ^ _KEY[i % len(_KEY)] for i, b in enumerate(data)])


def _xor_obfuscate(data: bytes) -> bytes:
    return base64.b64encode(_xor(data))


def _xor_deobfuscate(data: bytes) -> bytes:
    return _xor(base64.b64decode(data))


__all__ = ["save_token", "load_token", "redact"]
