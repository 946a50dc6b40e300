"""Export/import of the full inventory snapshot as a JSON document."""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from stockroom.core.errors import InvalidImportError
from stockroom.schemas.category import Category
from stockroom.schemas.movement import StockMovement
from stockroom.schemas.product import Product
from stockroom.schemas.transfer import ExportDocument

logger = logging.getLogger(__name__)


def build_export(
    products: list[Product],
    categories: list[Category],
    movements: list[StockMovement],
    now: datetime | None = None,
) -> ExportDocument:
    # the store's own records are already valid; skip re-validation of the snapshot
    return ExportDocument.model_construct(
        products=list(products),
        categories=list(categories),
        movements=list(movements),
        exported_at=now or datetime.now(timezone.utc),
    )


def export_filename(now: datetime | None = None, prefix: str = "inventory_export") -> str:
    day = (now or datetime.now(timezone.utc)).date().isoformat()
    return f"{prefix}_{day}.json"


def dump_export(document: ExportDocument) -> str:
    return json.dumps(document.to_storage(), ensure_ascii=False, indent=2)


def _format_errors(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "document"
        messages.append(f"{location}: {item['msg']}")
    return messages


def parse_import(raw: str | bytes | dict[str, Any]) -> ExportDocument:
    """Validate an import document completely before anything is written.

    Raises InvalidImportError with one message per problem found.
    """
    if not isinstance(raw, dict):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise InvalidImportError("Import document is not valid JSON", [str(e)]) from e
    if not isinstance(raw, dict):
        raise InvalidImportError("Import document must be a JSON object", ["document: not an object"])

    try:
        return ExportDocument.model_validate(raw)
    except ValidationError as e:
        errors = _format_errors(e)
        logger.warning("Rejected import document: %d problems", len(errors))
        raise InvalidImportError("Import document is not a valid inventory export", errors) from e
