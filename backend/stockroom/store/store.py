"""Inventory store: canonical in-memory state mirrored to durable storage.

Every public action updates the in-memory state through the reducer first and
then persists the affected collection. A storage failure is recorded on
``state.error`` and does not undo the in-memory change. Until a load has
succeeded, collection writes are refused so a partial view never overwrites
what storage holds.
"""

import logging
from datetime import datetime
from typing import Any, Callable

from stockroom.core.config import Settings, settings as default_settings
from stockroom.core.errors import ErrorKind, StockroomError, InvalidImportError
from stockroom.schemas.category import Category, CategoryCreate, CategoryUpdate
from stockroom.schemas.common import generate_id, utcnow
from stockroom.schemas.filters import SearchFiltersUpdate
from stockroom.schemas.movement import MovementType, StockMovement, StockMovementCreate
from stockroom.schemas.product import Product, ProductCreate, ProductUpdate
from stockroom.schemas.state import InventoryError, InventoryState, InventoryStats
from stockroom.schemas.transfer import ExportDocument
from stockroom.services import queries
from stockroom.services.persistence import InventoryPersistence
from stockroom.services.transfer import build_export, parse_import
from stockroom.store import actions as a
from stockroom.store.reducer import reduce

logger = logging.getLogger(__name__)

Listener = Callable[[InventoryState], None]

# Optional fields an update may clear by passing None explicitly.
_CLEARABLE_PRODUCT_FIELDS = {"barcode", "image"}


class Store:
    def __init__(
        self,
        persistence: InventoryPersistence,
        settings: Settings = default_settings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.persistence = persistence
        self.settings = settings
        self._clock = clock
        self._state = InventoryState()
        self._listeners: list[Listener] = []
        self._loaded = False

    # ── State plumbing ──────────────────────────

    @property
    def state(self) -> InventoryState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: a.Action) -> InventoryState:
        previous = self._state
        self._state = reduce(previous, action)
        if self._state is not previous:
            for listener in list(self._listeners):
                listener(self._state)
        return self._state

    def _record_error(self, message: str, kind: ErrorKind) -> None:
        logger.warning("%s (%s)", message, kind.value)
        self.dispatch(a.SetError(error=InventoryError(kind=kind, message=message)))

    def _persist(self, save: Callable[[list], None], records: list, context: str) -> bool:
        if not self._loaded:
            self._record_error(
                f"{context}: inventory has not been loaded from storage", ErrorKind.STORAGE_UNAVAILABLE,
            )
            return False
        try:
            save(records)
            return True
        except StockroomError as e:
            self._record_error(f"{context}: {e.message}", e.kind)
            return False

    # ── Loading ──────────────────────────

    def load_data(self) -> bool:
        """Replace in-memory collections with what storage holds (seeding on first run)."""
        self.dispatch(a.SetLoading(is_loading=True))
        try:
            products = self.persistence.load_products()
            categories = self.persistence.load_categories()
            movements = self.persistence.load_movements()
        except StockroomError as e:
            self._loaded = False
            self._record_error(f"Error loading inventory data: {e.message}", e.kind)
            return False
        finally:
            self.dispatch(a.SetLoading(is_loading=False))

        self.dispatch(a.SetProducts(products=products))
        self.dispatch(a.SetCategories(categories=categories))
        self.dispatch(a.SetMovements(movements=movements))
        self.dispatch(a.SetError(error=None))
        self._loaded = True
        logger.info(
            "Loaded %d products, %d categories, %d movements",
            len(products), len(categories), len(movements),
        )
        return True

    # ── Lookups ──────────────────────────

    def get_product(self, product_id: str) -> Product | None:
        return next((p for p in self._state.products if p.id == product_id), None)

    def get_category(self, category_id: str) -> Category | None:
        return next((c for c in self._state.categories if c.id == category_id), None)

    @property
    def selected_product(self) -> Product | None:
        if self._state.selected_product_id is None:
            return None
        return self.get_product(self._state.selected_product_id)

    # ── Products ──────────────────────────

    def add_product(self, data: ProductCreate) -> Product:
        now = self._clock()
        product = Product(**data.model_dump(), id=generate_id(), created_at=now, updated_at=now)
        self.dispatch(a.AddProduct(product=product))
        self._persist(self.persistence.save_products, self._state.products, "Error adding product")
        return product

    def update_product(self, product_id: str, changes: ProductUpdate | dict[str, Any]) -> Product | None:
        """Merge changes into a product. Unknown ids are ignored."""
        current = self.get_product(product_id)
        if current is None:
            return None
        if isinstance(changes, dict):
            changes = ProductUpdate.model_validate(changes)

        update = {
            field: value
            for field, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or field in _CLEARABLE_PRODUCT_FIELDS
        }
        update["updated_at"] = self._clock()
        product = current.model_copy(update=update)

        self.dispatch(a.UpdateProduct(product=product))
        self._persist(self.persistence.save_products, self._state.products, "Error updating product")
        return product

    def delete_product(self, product_id: str) -> None:
        self.dispatch(a.DeleteProduct(product_id=product_id))
        self._persist(self.persistence.save_products, self._state.products, "Error deleting product")

    def select_product(self, product_id: str | None) -> None:
        self.dispatch(a.SelectProduct(product_id=product_id))

    # ── Categories ──────────────────────────

    def add_category(self, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump(), id=generate_id(), created_at=self._clock())
        self.dispatch(a.AddCategory(category=category))
        self._persist(self.persistence.save_categories, self._state.categories, "Error adding category")
        return category

    def update_category(self, category_id: str, changes: CategoryUpdate) -> Category | None:
        current = self.get_category(category_id)
        if current is None:
            return None
        category = current.model_copy(update=changes.model_dump(exclude_none=True))
        self.dispatch(a.UpdateCategory(category=category))
        self._persist(self.persistence.save_categories, self._state.categories, "Error updating category")
        return category

    def delete_category(self, category_id: str) -> None:
        """Remove a category. Callers check that no product still references it."""
        self.dispatch(a.DeleteCategory(category_id=category_id))
        self._persist(self.persistence.save_categories, self._state.categories, "Error deleting category")

    # ── Stock ──────────────────────────

    def add_stock_movement(self, data: StockMovementCreate) -> StockMovement:
        fields = data.model_dump()
        fields["created_by"] = fields["created_by"] or self.settings.DEFAULT_MOVEMENT_AUTHOR
        movement = StockMovement(**fields, id=generate_id(), created_at=self._clock())
        self.dispatch(a.AddMovement(movement=movement))
        self._persist(self.persistence.save_movements, self._state.movements, "Error adding stock movement")
        return movement

    def update_stock(self, product_id: str, quantity: int, reason: str) -> StockMovement | None:
        """Set an absolute stock level and log the implied movement. Unknown ids are ignored."""
        product = self.get_product(product_id)
        if product is None:
            return None

        movement = self.add_stock_movement(StockMovementCreate(
            product_id=product_id,
            type=MovementType.IN if quantity >= product.stock else MovementType.OUT,
            quantity=abs(quantity - product.stock),
            reason=reason,
        ))
        self.dispatch(a.UpdateStock(product_id=product_id, quantity=quantity, updated_at=self._clock()))
        self._persist(self.persistence.save_products, self._state.products, "Error updating stock")
        return movement

    # ── Filters and derived reads ──────────────────────────

    def set_filters(self, changes: SearchFiltersUpdate | dict[str, Any]) -> None:
        if isinstance(changes, dict):
            changes = SearchFiltersUpdate.model_validate(changes)
        self.dispatch(a.SetFilters(changes=changes))

    def clear_filters(self) -> None:
        self.dispatch(a.ResetFilters())

    def get_filtered_products(self) -> list[Product]:
        """Search, then filter, then sort the current products by the current filters."""
        filters = self._state.filters
        products = queries.search_products(self._state.products, filters.query, self._state.categories)
        products = queries.filter_products(products, filters)
        return queries.sort_products(products, filters.sort_by, filters.sort_order)

    def get_stats(self, now: datetime | None = None) -> InventoryStats:
        return queries.compute_stats(
            self._state.products,
            self._state.categories,
            self._state.movements,
            now=now or self._clock(),
            recent_hours=self.settings.RECENT_MOVEMENT_HOURS,
        )

    # ── Export / import ──────────────────────────

    def export_data(self) -> ExportDocument:
        document = build_export(
            self._state.products, self._state.categories, self._state.movements, now=self._clock(),
        )
        logger.info("Exported %d products", len(document.products))
        return document

    def import_data(self, raw: str | bytes | dict[str, Any]) -> bool:
        """Validate a document, replace all three collections atomically, then reload.

        Returns False (with ``state.error`` set) when the document is invalid or
        the write fails; storage is left as it was in both cases.
        """
        try:
            document = parse_import(raw)
        except InvalidImportError as e:
            self._record_error(f"Error importing data: {e.message}", e.kind)
            return False

        try:
            self.persistence.replace_all(document.products, document.categories, document.movements)
        except StockroomError as e:
            self._record_error(f"Error importing data: {e.message}", ErrorKind.IMPORT_FAILED)
            return False

        logger.info(
            "Imported %d products, %d categories, %d movements",
            len(document.products), len(document.categories), len(document.movements),
        )
        return self.load_data()
