# src/infrastructure/kashier.py

import hashlib
import hmac
from typing import Any, Mapping
from urllib.parse import quote


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_signature_payload(data: Mapping[str, Any]) -> str:
    """
    Query string over the fields named in data["signatureKeys"], keys sorted,
    values percent-encoded with only unreserved characters left bare.
    """
    signature_keys = data.get("signatureKeys")
    if not isinstance(signature_keys, list):
        signature_keys = []
    keys = sorted(str(key) for key in signature_keys)
    parts = []
    for key in keys:
        if key not in data:
            continue
        value = data[key]
        if value is None:
            parts.append(quote(key, safe=""))
            continue
        parts.append(f"{quote(key, safe='')}={quote(_stringify(value), safe='')}")
    return "&".join(parts)


def sign_payload(data: Mapping[str, Any], secret: str) -> str:
    payload = build_signature_payload(data)
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_webhook_signature(
    data: Mapping[str, Any],
    signature: str,
    secret: str,
) -> bool:
    if not isinstance(data, Mapping):
        return False
    signature_keys = data.get("signatureKeys")
    if not isinstance(signature_keys, list) or not signature_keys:
        return False
    expected = sign_payload(data, secret)
    return hmac.compare_digest(
        expected.encode("utf-8"),
        signature.strip().lower().encode("utf-8"),
    )
