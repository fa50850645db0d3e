"""Persistence adapter: the product list stored as one serialized blob.

The whole list lives as a JSON array under a single key of the ``kv_store``
table, so every write replaces the full list inside one transaction.
"""
import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from config import STORAGE_KEY
from src.models.database import SessionLocal
from src.models.kv_entry import KeyValueEntry
from src.models.product import ProductRecord
from src.services.utils import parse_date, parse_number

logger = logging.getLogger(__name__)


class PersistenceReadError(Exception):
    """Raised when the stored blob cannot be decoded."""


class PersistenceWriteError(Exception):
    """Raised when the product list could not be saved."""


def encode_records(records: list[ProductRecord]) -> str:
    """Serialize records to the JSON blob format."""
    return json.dumps([r.to_dict() for r in records])


def decode_records(raw: str) -> list[ProductRecord]:
    """Parse a JSON blob into records.

    Raises PersistenceReadError when the blob is not a JSON array. Entries
    that are not objects, lack an id, or repeat an earlier id are skipped.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise PersistenceReadError(f"Stored products are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PersistenceReadError("Stored products are not a list")

    records: list[ProductRecord] = []
    seen: set[str] = set()
    for item in data:
        if not isinstance(item, dict):
            continue
        record = _record_from_dict(item)
        if record is None:
            continue
        if record.id in seen:
            logger.warning("Skipping duplicate stored product id %s", record.id)
            continue
        seen.add(record.id)
        records.append(record)
    return records


def _record_from_dict(item: dict) -> ProductRecord | None:
    product_id = item.get("id")
    if product_id is None or str(product_id).strip() == "":
        return None
    try:
        expiry = parse_date(item.get("expiryDate"))
    except (TypeError, ValueError):
        expiry = None
    return ProductRecord(
        id=str(product_id),
        name=str(item.get("name") or ""),
        category=str(item.get("category") or ""),
        description=str(item.get("description") or ""),
        expiry_date=expiry,
        cost_price=parse_number(item.get("costPrice")) or 0.0,
        sell_price=parse_number(item.get("sellPrice")) or 0.0,
        discount=parse_number(item.get("discount")) or 0.0,
    )


class SqlBlobStorage:
    """Read/write the full product list under one key/value row."""

    def __init__(self, key: str = STORAGE_KEY, session_factory=None):
        self.key = key
        self._session_factory = session_factory or SessionLocal

    def read_all(self) -> list[ProductRecord]:
        """Return the stored records; missing or corrupt data yields []."""
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, self.key)
            raw = entry.value if entry is not None else None
        except SQLAlchemyError:
            logger.exception("Could not read stored products")
            return []
        finally:
            session.close()

        if raw is None:
            return []
        try:
            records = decode_records(raw)
        except PersistenceReadError as exc:
            logger.warning("Treating product storage as empty: %s", exc)
            return []
        logger.info("Loaded %d product(s) from storage", len(records))
        return records

    def write_all(self, records: list[ProductRecord]) -> None:
        """Replace the stored list in a single transaction."""
        payload = encode_records(records)
        session = self._session_factory()
        try:
            entry = session.get(KeyValueEntry, self.key)
            if entry is None:
                session.add(KeyValueEntry(key=self.key, value=payload))
            else:
                entry.value = payload
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Could not save %d product(s)", len(records))
            raise PersistenceWriteError(str(exc)) from exc
        finally:
            session.close()
        logger.debug("Saved %d product(s)", len(records))
