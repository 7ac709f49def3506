import unittest
from datetime import date
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.errors import AppException
from app.database import init_db
from app.services.data_store import DataStore
from app.services.product_service import create_product, delete_product, update_product
from app.services.sale_service import (
    delete_sale,
    get_sale,
    list_sales,
    product_label,
    record_sale,
)

MUG = {
    "serial_number": "SN-001",
    "name": "Ceramic Mug",
    "cost_price": "5",
    "shipping_cost": "2",
    "sales_fee": "1",
    "selling_price": "20",
}


class SaleServiceTest(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:")
        init_db(self.engine)
        self.db = sessionmaker(bind=self.engine, expire_on_commit=False)()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_record_sale_snapshots_values(self):
        product = create_product(self.db, MUG)
        sale = record_sale(
            self.db,
            {"product_id": product.id, "quantity_sold": "3", "date": "2024-05-01"},
        )
        self.assertEqual(sale.total_revenue, Decimal("60.00"))
        self.assertEqual(sale.profit, Decimal("36.00"))
        self.assertEqual(sale.date, date(2024, 5, 1))
        self.assertEqual(product_label(sale), "Ceramic Mug")

    def test_product_edits_do_not_change_recorded_sales(self):
        product = create_product(self.db, MUG)
        sale = record_sale(self.db, {"product_id": product.id, "quantity_sold": 3, "date": "2024-05-01"})

        update_product(self.db, product.id, {**MUG, "cost_price": "15", "selling_price": "40"})
        self.db.expire_all()

        reloaded = get_sale(self.db, sale.id)
        self.assertEqual(reloaded.total_revenue, Decimal("60.00"))
        self.assertEqual(reloaded.profit, Decimal("36.00"))

    def test_unknown_product_records_zero_values(self):
        sale = record_sale(self.db, {"product_id": 404, "quantity_sold": 2, "date": "2024-05-01"})
        self.assertEqual(sale.total_revenue, 0)
        self.assertEqual(sale.profit, 0)
        self.assertEqual(product_label(sale), "Product ID: 404")

    def test_invalid_sale_writes_nothing(self):
        product = create_product(self.db, MUG)
        with self.assertRaises(AppException) as ctx:
            record_sale(self.db, {"product_id": product.id, "quantity_sold": "0", "date": "2024-05-01"})
        self.assertEqual(ctx.exception.errors, {"quantity_sold": "Quantity must be a positive number"})
        self.assertEqual(DataStore(self.db).count("sales"), 0)

    def test_deleting_product_keeps_its_sales(self):
        product = create_product(self.db, MUG)
        sale = record_sale(self.db, {"product_id": product.id, "quantity_sold": 1, "date": "2024-05-01"})

        delete_product(self.db, product.id, confirmed=True)
        self.db.expire_all()

        orphan = get_sale(self.db, sale.id)
        self.assertIsNone(orphan.product)
        self.assertEqual(product_label(orphan), "Product ID: {}".format(product.id))
        self.assertEqual(orphan.profit, Decimal("12.00"))

    def test_list_newest_first_with_date_filter(self):
        product = create_product(self.db, MUG)
        for day in ("2024-04-30", "2024-05-02", "2024-05-01"):
            record_sale(self.db, {"product_id": product.id, "quantity_sold": 1, "date": day})

        dates = [sale.date.isoformat() for sale in list_sales(self.db)]
        self.assertEqual(dates, ["2024-05-02", "2024-05-01", "2024-04-30"])

        may = [sale.date.isoformat() for sale in list_sales(self.db, date_filter="2024-05")]
        self.assertEqual(may, ["2024-05-02", "2024-05-01"])

    def test_limit_applies_after_date_filter(self):
        product = create_product(self.db, MUG)
        for day in ("2024-06-01", "2024-06-02", "2024-05-01", "2024-05-02", "2024-05-03"):
            record_sale(self.db, {"product_id": product.id, "quantity_sold": 1, "date": day})

        may = [sale.date.isoformat() for sale in list_sales(self.db, date_filter="2024-05", limit=2)]
        self.assertEqual(may, ["2024-05-03", "2024-05-02"])

        latest = [sale.date.isoformat() for sale in list_sales(self.db, limit=2)]
        self.assertEqual(latest, ["2024-06-02", "2024-06-01"])

    def test_delete_sale(self):
        product = create_product(self.db, MUG)
        sale = record_sale(self.db, {"product_id": product.id, "quantity_sold": 1, "date": "2024-05-01"})

        with self.assertRaises(AppException):
            delete_sale(self.db, sale.id, confirmed=False)
        delete_sale(self.db, sale.id, confirmed=True)
        self.assertEqual(list_sales(self.db), [])


if __name__ == "__main__":
    unittest.main()
