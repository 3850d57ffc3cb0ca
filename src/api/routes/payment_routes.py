import logging

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from src.api.dependencies import get_db
from src.api.schemas.schemas import KashierWebhookRequest
from src.application.payment_webhook_service import PaymentWebhookService
from src.infrastructure import config
from src.infrastructure.kashier import verify_webhook_signature


router = APIRouter(tags=["payments"])
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Kashier-Signature",
}


def _cors_json(content: dict, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def _signature_error(data: dict, signature: str | None) -> JSONResponse | None:
    """
    Returns the rejection to send, or None when the request may proceed.
    """
    if config.webhook_test_mode():
        logger.info("TEST MODE: skipping signature validation")
        return None

    secret = config.kashier_api_key()
    if not secret:
        logger.error("Missing KASHIER_API_KEY")
        return _cors_json(
            {"error": "Server configuration error"},
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if not signature:
        logger.error("Missing x-kashier-signature header")
        return _cors_json(
            {"error": "Missing signature header"},
            status.HTTP_401_UNAUTHORIZED,
        )

    if not verify_webhook_signature(data, signature, secret):
        logger.error("Invalid webhook signature: %s", signature)
        return _cors_json(
            {"error": "Invalid signature"},
            status.HTTP_401_UNAUTHORIZED,
        )

    return None


@router.options("/payment/webhook")
def payment_webhook_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post("/payment/webhook")
def payment_webhook(
    request: KashierWebhookRequest,
    x_kashier_signature: str | None = Header(default=None),
    db: Session = Depends(get_db),
):
    rejection = _signature_error(request.data, x_kashier_signature)
    if rejection is not None:
        return rejection

    # Anything past verification is acknowledged so the gateway does not retry.
    PaymentWebhookService(db).apply_payment(request.data, request.event)
    return _cors_json({"status": "success"})
