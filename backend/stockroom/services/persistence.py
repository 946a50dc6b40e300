"""Persistence adapter: the three inventory collections as JSON arrays in key-value storage."""

import enum
import json
import logging

from pydantic import TypeAdapter, ValidationError

from stockroom.core.errors import CorruptDataError
from stockroom.schemas.category import Category
from stockroom.schemas.common import CamelModel
from stockroom.schemas.movement import StockMovement
from stockroom.schemas.product import Product
from stockroom.services.seed import default_categories, default_products
from stockroom.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class Collection(str, enum.Enum):
    PRODUCTS = "inventory_products"
    CATEGORIES = "inventory_categories"
    MOVEMENTS = "inventory_movements"


_ADAPTERS: dict[Collection, TypeAdapter] = {
    Collection.PRODUCTS: TypeAdapter(list[Product]),
    Collection.CATEGORIES: TypeAdapter(list[Category]),
    Collection.MOVEMENTS: TypeAdapter(list[StockMovement]),
}

_SEEDS = {
    Collection.PRODUCTS: default_products,
    Collection.CATEGORIES: default_categories,
}


def serialize_records(records: list[CamelModel]) -> str:
    return json.dumps([r.to_storage() for r in records], ensure_ascii=False)


class InventoryPersistence:
    """Reads and writes products, categories and movements.

    Storage failures propagate as ``StorageUnavailableError``; a stored value
    that does not parse raises ``CorruptDataError``.
    """

    def __init__(self, storage: KeyValueStorage, seed_on_first_run: bool = True):
        self.storage = storage
        self.seed_on_first_run = seed_on_first_run

    def load(self, collection: Collection) -> list:
        raw = self.storage.get_item(collection.value)
        if raw is None:
            return self._bootstrap(collection)
        try:
            return _ADAPTERS[collection].validate_json(raw)
        except ValidationError as e:
            raise CorruptDataError(
                f"Stored {collection.value} is invalid ({e.error_count()} errors)"
            ) from e

    def save(self, collection: Collection, records: list[CamelModel]) -> None:
        self.storage.set_item(collection.value, serialize_records(records))

    def _bootstrap(self, collection: Collection) -> list:
        seed = _SEEDS.get(collection)
        if seed is None or not self.seed_on_first_run:
            return []
        records = seed()
        self.save(collection, records)
        logger.info("Seeded %s with %d default records", collection.value, len(records))
        return records

    def load_products(self) -> list[Product]:
        return self.load(Collection.PRODUCTS)

    def load_categories(self) -> list[Category]:
        return self.load(Collection.CATEGORIES)

    def load_movements(self) -> list[StockMovement]:
        return self.load(Collection.MOVEMENTS)

    def save_products(self, products: list[Product]) -> None:
        self.save(Collection.PRODUCTS, products)

    def save_categories(self, categories: list[Category]) -> None:
        self.save(Collection.CATEGORIES, categories)

    def save_movements(self, movements: list[StockMovement]) -> None:
        self.save(Collection.MOVEMENTS, movements)

    def replace_all(
        self,
        products: list[Product],
        categories: list[Category],
        movements: list[StockMovement],
    ) -> None:
        """Replace the three collections in one storage transaction."""
        self.storage.set_items({
            Collection.PRODUCTS.value: serialize_records(products),
            Collection.CATEGORIES.value: serialize_records(categories),
            Collection.MOVEMENTS.value: serialize_records(movements),
        })
