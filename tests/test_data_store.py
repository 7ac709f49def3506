import unittest
from datetime import date
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.errors import AppException, ErrorType
from app.database import init_db
from app.services.data_store import DataStore


def product_values(serial_number, name, selling_price="20"):
    return {
        "serial_number": serial_number,
        "name": name,
        "cost_price": Decimal("5"),
        "shipping_cost": Decimal("2"),
        "sales_fee": Decimal("1"),
        "selling_price": Decimal(selling_price),
    }


class DataStoreTest(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:")
        init_db(self.engine)
        self.db = sessionmaker(bind=self.engine, expire_on_commit=False)()
        self.store = DataStore(self.db)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_insert_assigns_id_and_timestamps(self):
        product = self.store.insert("products", product_values("SN-1", "Mug"))
        self.assertIsNotNone(product.id)
        self.assertIsNotNone(product.created_at)
        self.assertIsNotNone(product.updated_at)
        self.assertEqual(product.selling_price, Decimal("20.00"))

    def test_insert_ignores_store_assigned_columns(self):
        product = self.store.insert("products", {**product_values("SN-1", "Mug"), "id": 999})
        self.assertNotEqual(product.id, 999)

    def test_list_filter_order_and_limit(self):
        self.store.insert("products", product_values("SN-2", "Teapot"))
        self.store.insert("products", product_values("SN-1", "Mug"))
        self.store.insert("products", product_values("SN-3", "Bowl"))

        names = [p.name for p in self.store.list("products", order_by="name")]
        self.assertEqual(names, ["Bowl", "Mug", "Teapot"])

        names = [p.name for p in self.store.list("products", order_by="name", descending=True, limit=2)]
        self.assertEqual(names, ["Teapot", "Mug"])

        filtered = self.store.list("products", filters={"serial_number": "SN-1"})
        self.assertEqual([p.name for p in filtered], ["Mug"])

    def test_count(self):
        self.assertEqual(self.store.count("products"), 0)
        self.store.insert("products", product_values("SN-1", "Mug"))
        self.store.insert("products", product_values("SN-1", "Mug again"))
        self.assertEqual(self.store.count("products"), 2)
        self.assertEqual(self.store.count("products", filters={"name": "Mug"}), 1)

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.store.get("products", 42))

    def test_update_and_delete(self):
        product = self.store.insert("products", product_values("SN-1", "Mug"))
        updated = self.store.update("products", product.id, {"name": "Big Mug"})
        self.assertEqual(updated.name, "Big Mug")

        self.store.delete("products", product.id)
        self.assertIsNone(self.store.get("products", product.id))

    def test_update_missing_row_is_not_found(self):
        with self.assertRaises(AppException) as ctx:
            self.store.update("products", 7, {"name": "x"})
        self.assertEqual(ctx.exception.error_type, ErrorType.NOT_FOUND)

    def test_delete_missing_row_is_not_found(self):
        with self.assertRaises(AppException) as ctx:
            self.store.delete("sales", 7)
        self.assertEqual(ctx.exception.error_type, ErrorType.NOT_FOUND)

    def test_sales_rows_expand_product(self):
        product = self.store.insert("products", product_values("SN-1", "Mug"))
        sale = self.store.insert(
            "sales",
            {
                "product_id": product.id,
                "quantity_sold": 2,
                "date": date(2024, 5, 1),
                "total_revenue": Decimal("40"),
                "profit": Decimal("24"),
            },
        )
        self.db.expire_all()
        loaded = self.store.list("sales")[0]
        self.assertEqual(loaded.id, sale.id)
        self.assertEqual(loaded.product.name, "Mug")

    def test_unknown_table_and_column(self):
        with self.assertRaises(ValueError):
            self.store.list("customers")
        with self.assertRaises(ValueError):
            self.store.list("products", filters={"colour": "red"})
        with self.assertRaises(ValueError):
            self.store.insert("products", {"colour": "red"})

    def test_database_error_becomes_store_failure(self):
        with patch.object(self.db, "commit", side_effect=SQLAlchemyError("disk full")):
            with self.assertRaises(AppException) as ctx:
                self.store.insert("products", product_values("SN-1", "Mug"))
        self.assertEqual(ctx.exception.error_type, ErrorType.STORE_FAILURE)
        self.assertEqual(self.store.count("products"), 0)

    def test_writes_log_table_and_row_id(self):
        with self.assertLogs("app.services.data_store", level="INFO") as logs:
            product = self.store.insert("products", product_values("SN-1", "Mug"))
            self.store.delete("products", product.id)

        inserted, deleted = logs.records
        self.assertEqual((inserted.table, inserted.row_id), ("products", product.id))
        self.assertEqual((deleted.table, deleted.row_id), ("products", product.id))

    def test_store_failure_log_carries_error_type(self):
        with patch.object(self.db, "commit", side_effect=SQLAlchemyError("disk full")):
            with self.assertLogs("app.services.data_store", level="ERROR") as logs:
                with self.assertRaises(AppException):
                    self.store.insert("sales", {"product_id": 1, "quantity_sold": 1, "date": date(2024, 5, 1)})
        self.assertEqual(logs.records[0].table, "sales")
        self.assertEqual(logs.records[0].error_type, "store_failure")


if __name__ == "__main__":
    unittest.main()
