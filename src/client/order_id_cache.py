# src/client/order_id_cache.py

import json
import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

ORDER_IDS_STORAGE_KEY = "userOrderIds"


class OrderIdCache:
    """
    Booking ids this client has created, persisted as JSON on disk.

    The list is only a hint: `reconcile` checks it against the server and
    drops whatever the server no longer recognises.
    """

    def __init__(self, path: str | Path, storage_key: str = ORDER_IDS_STORAGE_KEY):
        self.path = Path(path)
        self.storage_key = storage_key

    def _read_storage(self) -> dict:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as handle:
            storage = json.load(handle)
        if not isinstance(storage, dict):
            raise ValueError("order id storage is not a JSON object")
        return storage

    def _write_ids(self, order_ids: list[str]) -> None:
        try:
            storage = self._read_storage()
        except ValueError:
            storage = {}
        storage[self.storage_key] = order_ids
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(storage, handle)

    def _stored_ids(self) -> list[str]:
        order_ids = self._read_storage().get(self.storage_key, [])
        if not isinstance(order_ids, list):
            raise ValueError(f"{self.storage_key} is not a list")
        kept = [item for item in order_ids if isinstance(item, str)]
        if len(kept) != len(order_ids):
            logger.warning("Ignoring %s non-string order ids in cache", len(order_ids) - len(kept))
        return kept

    def get(self) -> list[str]:
        try:
            return self._stored_ids()
        except ValueError as exc:
            logger.error("Error getting order ids: %s", exc)
            return []

    def add(self, order_id: str) -> None:
        try:
            order_ids = self._stored_ids()
        except ValueError as exc:
            logger.error("Error adding order id, resetting cache: %s", exc)
            self._write_ids([order_id])
            return

        if order_id not in order_ids:
            order_ids.append(order_id)
            self._write_ids(order_ids)

    def remove(self, order_id: str) -> None:
        try:
            order_ids = self._stored_ids()
        except ValueError as exc:
            logger.error("Error removing order id: %s", exc)
            return
        self._write_ids([item for item in order_ids if item != order_id])

    def reconcile(self, client: httpx.Client) -> list[dict]:
        """
        Validate cached ids with the server, prune the ones it rejects and
        return the full booking records for the rest.
        """
        order_ids = self.get()
        if not order_ids:
            return []

        try:
            response = client.post("/validate-order-ids", json={"orderIds": order_ids})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error validating order ids: %s", exc)
            return []

        if not isinstance(payload, dict):
            logger.error("Unexpected validation response: %r", payload)
            return []

        invalid_ids = [item for item in payload.get("invalidIds") or [] if isinstance(item, str)]
        if invalid_ids:
            self._write_ids([item for item in order_ids if item not in invalid_ids])
            logger.info("Pruned %s stale order ids", len(invalid_ids))

        return payload.get("allBookings") or []
