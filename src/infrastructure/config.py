# src/infrastructure/config.py

import os

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_PAYMENT_PROOF_PLACEHOLDER_URL = "payment-proofs/kashier/confirmed.webp"
DEFAULT_SETTINGS_FILE_PATH = "config/settings.json"


# Values are read from the environment on every call.
def webhook_test_mode() -> bool:
    return os.getenv("WEBHOOK_TEST_MODE", "false").strip().lower() in _TRUTHY


def kashier_api_key() -> str | None:
    return os.getenv("KASHIER_API_KEY") or None


def payment_proof_placeholder_url() -> str:
    return os.getenv(
        "PAYMENT_PROOF_PLACEHOLDER_URL",
        DEFAULT_PAYMENT_PROOF_PLACEHOLDER_URL,
    )


def settings_file_path() -> str:
    return os.getenv("SETTINGS_FILE_PATH", DEFAULT_SETTINGS_FILE_PATH)


def default_venue_id() -> str | None:
    return os.getenv("DEFAULT_VENUE_ID") or None


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
