"""Unit tests for the inventory Store (actions, persistence sync, derived reads)."""

from unittest.mock import MagicMock, patch

from stockroom.core.config import Settings
from stockroom.core.errors import ErrorKind, StorageUnavailableError
from stockroom.schemas.category import CategoryCreate, CategoryUpdate
from stockroom.schemas.filters import SortKey, SortOrder, StockLevel
from stockroom.schemas.movement import MovementType, StockMovementCreate
from stockroom.schemas.product import ProductCreate, ProductUpdate
from stockroom.services.persistence import InventoryPersistence
from stockroom.store.store import Store


def _product_data(**overrides) -> ProductCreate:
    fields = {
        "name": "Webcam Logitech C920",
        "description": "Cámara web Full HD",
        "category_id": "2",
        "price": 320000,
        "stock": 6,
        "min_stock": 2,
        "sku": "CAM-LOG-006",
    }
    fields.update(overrides)
    return ProductCreate(**fields)


def _failing_persistence(**failures) -> MagicMock:
    persistence = MagicMock(spec=InventoryPersistence)
    persistence.load_products.return_value = []
    persistence.load_categories.return_value = []
    persistence.load_movements.return_value = []
    for method in failures:
        getattr(persistence, method).side_effect = StorageUnavailableError("quota exceeded")
    return persistence


# ── Loading ──────────────────────────

def test_load_data_reads_seeded_collections(store):
    assert len(store.state.products) == 5
    assert len(store.state.categories) == 4
    assert store.state.movements == []
    assert store.state.is_loading is False
    assert store.state.error is None


def test_load_data_surfaces_unavailable_storage(test_settings):
    persistence = _failing_persistence(load_products=True)
    store = Store(persistence, settings=test_settings)

    assert store.load_data() is False
    assert store.state.error.kind == ErrorKind.STORAGE_UNAVAILABLE
    assert store.state.is_loading is False
    assert store.state.products == []


# ── Products ──────────────────────────

def test_add_product_assigns_id_and_timestamps_and_persists(store, storage, clock):
    product = store.add_product(_product_data())

    assert product.id
    assert product.created_at == clock.now
    assert product.updated_at == clock.now
    assert store.state.products[-1] == product
    assert InventoryPersistence(storage).load_products()[-1] == product


def test_add_product_persistence_failure_keeps_in_memory_append(test_settings):
    store = Store(_failing_persistence(save_products=True), settings=test_settings)
    store.load_data()

    product = store.add_product(_product_data())

    assert store.state.products == [product]
    assert store.state.error.kind == ErrorKind.STORAGE_UNAVAILABLE
    assert "Error adding product" in store.state.error.message


def test_update_product_merges_and_refreshes_updated_at(store, storage, clock):
    before = store.get_product("1")
    clock.advance(hours=1)

    updated = store.update_product("1", ProductUpdate(price=999.0))

    assert updated.price == 999.0
    assert updated.name == before.name
    assert updated.created_at == before.created_at
    assert updated.updated_at == clock.now
    assert InventoryPersistence(storage).load_products()[0].price == 999.0


def test_update_product_accepts_dict_and_clears_optional_fields(store):
    updated = store.update_product("1", {"barcode": None, "name": "Laptop HP 15"})

    assert updated.barcode is None
    assert updated.name == "Laptop HP 15"


def test_update_unknown_product_is_silent_noop(store):
    listener = MagicMock()
    store.subscribe(listener)

    assert store.update_product("nope", ProductUpdate(price=1.0)) is None
    assert store.state.error is None
    listener.assert_not_called()


def test_delete_product_clears_selection(store, storage):
    store.select_product("3")
    assert store.selected_product.id == "3"

    store.delete_product("3")

    assert store.selected_product is None
    assert store.state.selected_product_id is None
    assert "3" not in {p.id for p in InventoryPersistence(storage).load_products()}


# ── Categories ──────────────────────────

def test_add_update_delete_category(store, storage, clock):
    category = store.add_category(CategoryCreate(name="Redes", description="Routers", color="#EF4444"))
    assert category.created_at == clock.now

    store.update_category(category.id, CategoryUpdate(name="Redes y WiFi"))
    assert store.get_category(category.id).name == "Redes y WiFi"

    store.delete_category(category.id)
    assert store.get_category(category.id) is None
    assert [c.id for c in InventoryPersistence(storage).load_categories()] == ["1", "2", "3", "4"]


def test_failed_load_refuses_writes_until_a_load_succeeds(persistence, storage, test_settings):
    seeded = persistence.load_products()
    store = Store(persistence, settings=test_settings)

    with patch.object(InventoryPersistence, "load_products", side_effect=StorageUnavailableError("locked")):
        assert store.load_data() is False

    product = store.add_product(_product_data())

    assert store.state.products == [product]
    assert store.state.error.kind == ErrorKind.STORAGE_UNAVAILABLE
    assert "Error adding product" in store.state.error.message
    assert InventoryPersistence(storage).load_products() == seeded

    assert store.load_data() is True
    store.add_product(_product_data(name="Hub USB-C"))
    assert len(InventoryPersistence(storage).load_products()) == 6


def test_store_does_not_guard_category_deletion(store):
    # products 1 and 3 reference category 1; the store leaves that check to its callers
    store.delete_category("1")

    assert store.get_category("1") is None
    assert store.get_product("1").category_id == "1"


# ── Stock ──────────────────────────

def test_update_stock_logs_inbound_movement(store, storage):
    movement = store.update_stock("2", 10, "Reposición")

    assert movement.type == MovementType.IN
    assert movement.quantity == 7
    assert movement.product_id == "2"
    assert movement.created_by == "System"
    assert store.state.movements == [movement]
    assert store.get_product("2").stock == 10
    reloaded = InventoryPersistence(storage)
    assert reloaded.load_products()[1].stock == 10
    assert reloaded.load_movements() == [movement]


def test_update_stock_logs_outbound_movement(store):
    movement = store.update_stock("1", 4, "Venta")

    assert movement.type == MovementType.OUT
    assert movement.quantity == 11


def test_update_stock_to_same_quantity_is_inbound_zero(store):
    movement = store.update_stock("1", 15, "Conteo")

    assert movement.type == MovementType.IN
    assert movement.quantity == 0
    assert len(store.state.movements) == 1


def test_update_stock_unknown_product_is_silent(store):
    assert store.update_stock("missing", 3, "x") is None
    assert store.state.movements == []
    assert store.state.error is None


def test_update_stock_below_zero_is_persisted_and_reloads(store, storage):
    movement = store.update_stock("1", -5, "Conteo")

    assert movement.type == MovementType.OUT
    assert movement.quantity == 20
    assert store.load_data() is True
    assert store.state.error is None
    assert store.get_product("1").stock == -5
    assert InventoryPersistence(storage).load_products()[0].stock == -5


def test_movement_author_defaults_to_configured_name(persistence):
    store = Store(persistence, settings=Settings(DATABASE_URL="sqlite://", DEFAULT_MOVEMENT_AUTHOR="Bodega"))
    store.load_data()

    counted = store.update_stock("2", 4, "Conteo")
    manual = store.add_stock_movement(StockMovementCreate(
        product_id="2", type=MovementType.ADJUSTMENT, quantity=1, reason="Ajuste",
    ))
    signed = store.add_stock_movement(StockMovementCreate(
        product_id="2", type=MovementType.OUT, quantity=1, reason="Venta", created_by="ana",
    ))

    assert counted.created_by == "Bodega"
    assert manual.created_by == "Bodega"
    assert signed.created_by == "ana"


def test_add_stock_movement_appends_without_changing_stock(store):
    movement = store.add_stock_movement(StockMovementCreate(
        product_id="5", type=MovementType.ADJUSTMENT, quantity=2, reason="Inventario", notes="conteo anual",
    ))

    assert store.state.movements == [movement]
    assert store.get_product("5").stock == 12


# ── Filters and derived reads ──────────────────────────

def test_get_filtered_products_searches_filters_and_sorts(store):
    store.set_filters({"query": "oficina", "sortBy": "price", "sortOrder": "desc"})

    result = store.get_filtered_products()

    # matches description "...oficina" and category "Oficina"
    assert [p.id for p in result] == ["1", "3", "5"]


def test_get_filtered_products_by_stock_level(store):
    store.set_filters({"stock_level": StockLevel.LOW_STOCK})
    assert [p.id for p in store.get_filtered_products()] == ["2"]

    store.set_filters({"stock_level": StockLevel.OUT_OF_STOCK})
    assert [p.id for p in store.get_filtered_products()] == ["4"]


def test_get_filtered_products_reflects_latest_state(store):
    store.set_filters({"sort_by": SortKey.STOCK, "sort_order": SortOrder.ASC})
    assert store.get_filtered_products()[0].id == "4"

    store.update_stock("4", 100, "Reposición")

    assert store.get_filtered_products()[-1].id == "4"


def test_clear_filters_restores_defaults(store):
    store.set_filters({"query": "zzz"})
    assert store.get_filtered_products() == []

    store.clear_filters()

    assert len(store.get_filtered_products()) == 5


def test_get_stats_on_seed_data(store):
    stats = store.get_stats()

    assert stats.total_products == 5
    assert stats.out_of_stock_count == 1
    assert stats.low_stock_count == 1
    assert stats.total_categories == 4
    assert stats.total_value == (
        1200000 * 15 + 85000 * 3 + 450000 * 8 + 150000 * 0 + 280000 * 12
    )


def test_stats_counts_recent_movements_against_clock(store, clock):
    store.update_stock("1", 16, "Compra")
    clock.advance(hours=25)
    store.update_stock("1", 17, "Compra")

    assert store.get_stats().recent_movements == 1


# ── Subscribers ──────────────────────────

def test_subscribers_are_notified_until_unsubscribed(store):
    seen = []
    unsubscribe = store.subscribe(lambda state: seen.append(len(state.products)))

    store.add_product(_product_data())
    unsubscribe()
    store.delete_product("1")

    assert seen == [6]
