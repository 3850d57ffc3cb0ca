import logging
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.infrastructure import config
from src.infrastructure.repositories.booking_repository import BookingRepository

logger = logging.getLogger(__name__)


def extract_merchant_order_id(data: Mapping[str, Any]) -> str | None:
    merchant_id = data.get("merchantOrderId") or data.get("orderId")
    return str(merchant_id) if merchant_id else None


class PaymentWebhookService:
    """
    Applies a verified gateway notification to the booking it names.
    Never raises: the gateway gets an acknowledgment regardless.
    """

    def __init__(self, db: Session):
        self.db = db
        self.booking_repository = BookingRepository(db)

    def apply_payment(self, data: Mapping[str, Any], event: str | None = None) -> bool:
        logger.info("Webhook received: %s", event)

        merchant_id = extract_merchant_order_id(data)
        if not merchant_id:
            logger.info("No merchant order id found in webhook data")
            return False

        transaction_id = data.get("transactionId")
        try:
            updated = self.booking_repository.mark_paid_by_gateway(
                booking_id=merchant_id,
                transaction_id=str(transaction_id) if transaction_id is not None else None,
                proof_image=config.payment_proof_placeholder_url(),
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error approving booking %s from webhook", merchant_id)
            return False

        if not updated:
            logger.warning("Webhook named booking %s but no record matched", merchant_id)
            return False

        logger.info("Booking %s approved via Kashier", merchant_id)
        return True
