import hashlib
import hmac

from src.infrastructure.kashier import (
    build_signature_payload,
    sign_payload,
    verify_webhook_signature,
)

SECRET = "kashier-test-secret"


def _data(**overrides):
    data = {
        "merchantOrderId": "11111111-1111-4111-8111-111111111111",
        "transactionId": "TX-1",
        "amount": 100,
        "currency": "EGP",
        "status": "SUCCESS",
        "signatureKeys": ["merchantOrderId", "transactionId", "amount", "currency", "status"],
    }
    data.update(overrides)
    return data


def test_payload_uses_sorted_signature_keys_only():
    data = _data(extra="ignored")

    assert build_signature_payload(data) == (
        "amount=100&currency=EGP"
        "&merchantOrderId=11111111-1111-4111-8111-111111111111"
        "&status=SUCCESS&transactionId=TX-1"
    )


def test_payload_percent_encodes_reserved_characters():
    data = {"signatureKeys": ["note", "flag"], "note": "a b!(c)*'", "flag": True}

    assert build_signature_payload(data) == "flag=true&note=a%20b%21%28c%29%2A%27"


def test_signature_is_hex_hmac_sha256_of_payload():
    data = _data()
    expected = hmac.new(
        SECRET.encode(),
        build_signature_payload(data).encode(),
        hashlib.sha256,
    ).hexdigest()

    assert sign_payload(data, SECRET) == expected


def test_verify_accepts_matching_signature():
    data = _data()

    assert verify_webhook_signature(data, sign_payload(data, SECRET), SECRET)


def test_verify_rejects_tampered_payload():
    signature = sign_payload(_data(), SECRET)

    assert not verify_webhook_signature(_data(amount=1), signature, SECRET)


def test_verify_rejects_wrong_secret():
    data = _data()

    assert not verify_webhook_signature(data, sign_payload(data, "other"), SECRET)


def test_verify_rejects_data_without_signature_keys():
    data = _data()
    signature = sign_payload(data, SECRET)
    del data["signatureKeys"]

    assert not verify_webhook_signature(data, signature, SECRET)


def test_verify_rejects_non_list_signature_keys():
    for signature_keys in [5, True, "amount", {"amount": 1}]:
        data = _data(signatureKeys=signature_keys)

        assert build_signature_payload(data) == ""
        assert not verify_webhook_signature(data, "0" * 64, SECRET)
