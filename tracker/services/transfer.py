"""Whole-store export and import.

The export file holds the three record collections under the keys
``customers``, ``fields`` and ``templates``. Importing writes those keys
straight to the store; callers reload the workspace afterwards. Beyond the
size quota and the record shapes nothing is checked, so imported data may
contain duplicate customers or repeated joinIds.
"""
import json
import logging

from pydantic import TypeAdapter, ValidationError

from tracker.core.config import settings
from tracker.core.exceptions import ImportTooLargeError, ImportValidationError
from tracker.models import Customer, FieldDefinition, PrintTemplate
from tracker.services.customers import CUSTOMERS_KEY
from tracker.services.fields import FIELDS_KEY
from tracker.services.templates import TEMPLATES_KEY
from tracker.store import KeyValueStore

logger = logging.getLogger(__name__)

EXPORT_COLLECTIONS = {
    CUSTOMERS_KEY: TypeAdapter(list[Customer]),
    FIELDS_KEY: TypeAdapter(list[FieldDefinition]),
    TEMPLATES_KEY: TypeAdapter(list[PrintTemplate]),
}


def byte_size(data) -> int:
    """Size of ``data`` as compact UTF-8 JSON."""
    return len(json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def build_export(customers, fields, templates) -> dict:
    return {
        CUSTOMERS_KEY: [c.to_store() for c in customers],
        FIELDS_KEY: [f.to_store() for f in fields],
        TEMPLATES_KEY: [t.to_store() for t in templates],
    }


def export_json(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def storage_usage(payload: dict, quota: int | None = None) -> dict:
    """Bytes used by each exported collection against the import quota."""
    quota = quota or settings.import_max_bytes
    sizes = {key: byte_size(value) for key, value in payload.items()}
    used = sum(sizes.values())
    return {
        "used": used,
        "total": quota,
        "percent": round(used / quota * 100, 2) if quota else 0.0,
        "collections": sizes,
    }


def parse_import(raw: str | bytes, max_bytes: int | None = None) -> dict:
    """
    Decode an export file.

    Raises:
        ImportValidationError: The file is not JSON, is not an object with
            the three collection keys, or holds records that cannot be
            decoded.
        ImportTooLargeError: The decoded data exceeds the quota.
    """
    max_bytes = max_bytes or settings.import_max_bytes
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ImportValidationError(f"Import file is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ImportValidationError("Import file must contain a JSON object")

    size = byte_size(data)
    if size > max_bytes:
        logger.warning(f"Rejected import of {size} bytes (limit {max_bytes})")
        raise ImportTooLargeError(
            f"Import failed: data size {size} bytes exceeds storage limit of {max_bytes} bytes"
        )

    missing = [key for key in EXPORT_COLLECTIONS if key not in data]
    if missing:
        raise ImportValidationError(f"Import file is missing: {', '.join(missing)}")

    decoded = {}
    for key, adapter in EXPORT_COLLECTIONS.items():
        try:
            records = adapter.validate_python(data[key])
        except ValidationError as e:
            raise ImportValidationError(f"Import file has invalid {key}: {e.error_count()} errors") from e
        decoded[key] = adapter.dump_json(records, by_alias=True).decode()
    return decoded


def import_data(store: KeyValueStore, raw: str | bytes, max_bytes: int | None = None) -> dict:
    """Validate ``raw`` and overwrite the collection keys. Returns record counts."""
    decoded = parse_import(raw, max_bytes)
    for key, value in decoded.items():
        store.set(key, value)
    counts = {key: len(json.loads(value)) for key, value in decoded.items()}
    logger.info(f"Imported data: {counts}")
    return counts
