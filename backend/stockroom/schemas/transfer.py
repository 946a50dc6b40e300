"""Export/import document schema."""

from typing import Any

from pydantic import model_validator

from stockroom.schemas.category import Category
from stockroom.schemas.common import CamelModel, UtcDateTime
from stockroom.schemas.movement import StockMovement
from stockroom.schemas.product import Product


def _resolve_legacy_categories(data: Any) -> Any:
    """Older exports reference categories by name (``category``); map them to ids."""
    if not isinstance(data, dict):
        return data
    products = data.get("products")
    categories = data.get("categories")
    if not isinstance(products, list) or not isinstance(categories, list):
        return data

    ids_by_name = {
        c.get("name"): c.get("id")
        for c in categories
        if isinstance(c, dict)
    }
    resolved = []
    unknown = set()
    for product in products:
        if (
            isinstance(product, dict)
            and "categoryId" not in product
            and "category_id" not in product
            and "category" in product
        ):
            product = dict(product)
            name = product.pop("category")
            if name not in ids_by_name:
                unknown.add(str(name))
            product["categoryId"] = ids_by_name.get(name)
        resolved.append(product)
    if unknown:
        raise ValueError(f"products reference unknown categories: {', '.join(sorted(unknown))}")
    return {**data, "products": resolved}


class ExportDocument(CamelModel):
    """Full inventory snapshot.

    Products may point at a category id the document does not carry; the store
    allows deleting a category still in use, and such a snapshot must import back.
    """
    products: list[Product]
    categories: list[Category]
    movements: list[StockMovement]
    exported_at: UtcDateTime

    @model_validator(mode="before")
    @classmethod
    def _legacy_category_names(cls, data: Any) -> Any:
        return _resolve_legacy_categories(data)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "ExportDocument":
        for kind, records in (
            ("product", self.products),
            ("category", self.categories),
            ("movement", self.movements),
        ):
            ids = [r.id for r in records]
            if len(ids) != len(set(ids)):
                raise ValueError(f"duplicate {kind} ids in document")
        return self
