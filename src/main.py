import logging
import os
import time

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from src.api.routes.admin_routes import router as admin_router
from src.api.routes.check_in_routes import router as check_in_router
from src.api.routes.order_routes import router as order_router
from src.api.routes.payment_routes import router as payment_router
from src.api.routes.settings_routes import router as settings_router
from src.api.routes.venue_routes import router as venue_router
from src.infrastructure import config
from src.infrastructure.db.session import engine
from src.infrastructure.db.models import Base

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Seat Reservation Engine")

app.include_router(order_router)
app.include_router(payment_router)
app.include_router(settings_router)
app.include_router(venue_router)
app.include_router(admin_router)
app.include_router(check_in_router)
logger = logging.getLogger(__name__)


def _wait_for_db() -> None:
    # Handles the common case where API starts before Postgres is ready.
    max_retries = int(os.getenv("DB_CONNECT_MAX_RETRIES", "30"))
    retry_delay_seconds = float(os.getenv("DB_CONNECT_RETRY_DELAY", "1.5"))

    for attempt in range(1, max_retries + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database is reachable.")
            return
        except OperationalError:
            if attempt == max_retries:
                logger.exception(
                    "Database not reachable after %s attempts. Check DATABASE_URL and Postgres status.",
                    max_retries,
                )
                raise
            logger.warning(
                "Database not ready (attempt %s/%s). Retrying in %.1f seconds...",
                attempt,
                max_retries,
                retry_delay_seconds,
            )
            time.sleep(retry_delay_seconds)


@app.on_event("startup")
def on_startup() -> None:
    _wait_for_db()
    Base.metadata.create_all(bind=engine)


@app.get("/health")
def health():
    return {"message": "Seat Reservation Engine is running"}
