"""First-run catalogue written when storage holds no products or categories."""

from datetime import datetime, timezone

from stockroom.schemas.category import Category
from stockroom.schemas.product import Product, ProductStatus


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def default_categories() -> list[Category]:
    created = _day(2024, 1, 1)
    return [
        Category(id="1", name="Electrónicos", description="Dispositivos electrónicos y tecnología",
                 color="#3B82F6", created_at=created),
        Category(id="2", name="Accesorios", description="Accesorios para computadoras y dispositivos",
                 color="#10B981", created_at=created),
        Category(id="3", name="Oficina", description="Equipos y suministros de oficina",
                 color="#F59E0B", created_at=created),
        Category(id="4", name="Software", description="Licencias de software y aplicaciones",
                 color="#8B5CF6", created_at=created),
    ]


_IMAGE_HOST = "https://storage.googleapis.com/workspace-0f70711f-8b4e-4d94-86f1-2a93ccde5887/image"

_IMAGES = {
    "1": f"{_IMAGE_HOST}/d07abbd8-d7ee-4cc7-9dc5-ff868f16af5b.png",
    "2": "https://placehold.co/400x300?text=Mouse+Logitech+inalambrico+ergonomico+negro",
    "3": f"{_IMAGE_HOST}/29be42ed-2901-4488-875d-5bc2e608528d.png",
    "4": f"{_IMAGE_HOST}/a6e2b719-75ad-4c02-bb90-4a1d6d544e65.png",
    "5": f"{_IMAGE_HOST}/4bbb9bec-7a54-4370-a97a-86cf5c2d8737.png",
}


def default_products() -> list[Product]:
    rows = [
        # id, name, description, category_id, price, stock, min_stock, sku, barcode, created
        ("1", "Laptop HP Pavilion", "Laptop para oficina con procesador Intel i5", "1",
         1200000, 15, 5, "LAP-HP-001", "1234567890123", _day(2024, 1, 15)),
        ("2", "Mouse Inalámbrico Logitech", "Mouse ergonómico inalámbrico con precisión óptica", "2",
         85000, 3, 10, "MOU-LOG-002", "2345678901234", _day(2024, 1, 20)),
        ("3", 'Monitor Samsung 24"', "Monitor LED Full HD 24 pulgadas para oficina", "1",
         450000, 8, 3, "MON-SAM-003", "3456789012345", _day(2024, 1, 25)),
        ("4", "Teclado Mecánico RGB", "Teclado mecánico gaming con iluminación RGB", "2",
         150000, 0, 5, "TEC-RGB-004", "4567890123456", _day(2024, 2, 1)),
        ("5", "Impresora Canon Pixma", "Impresora multifuncional de tinta para oficina", "3",
         280000, 12, 4, "IMP-CAN-005", "5678901234567", _day(2024, 2, 5)),
    ]
    return [
        Product(
            id=pid, name=name, description=description, category_id=category_id,
            price=price, stock=stock, min_stock=min_stock, sku=sku, barcode=barcode, image=_IMAGES[pid],
            status=ProductStatus.ACTIVE, created_at=created, updated_at=created,
        )
        for pid, name, description, category_id, price, stock, min_stock, sku, barcode, created in rows
    ]
