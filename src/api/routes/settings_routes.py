import json
import logging

from fastapi import APIRouter, HTTPException, status

from src.api.schemas.schemas import PaymentModeResponse
from src.infrastructure import config


router = APIRouter(tags=["settings"])
logger = logging.getLogger(__name__)


def load_settings_file(path: str) -> dict:
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


@router.get("/settings/payment-mode", response_model=PaymentModeResponse)
def get_payment_mode():
    path = config.settings_file_path()
    try:
        mode = load_settings_file(path)["payment"]["mode"]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.error("Error fetching payment mode from %s: %s", path, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch payment mode",
        ) from exc

    return PaymentModeResponse(mode=str(mode))
