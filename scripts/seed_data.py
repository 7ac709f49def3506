import argparse
import logging
from datetime import date, timedelta

from sqlalchemy import delete

from app.core.logging import setup_logging
from app.database import SessionLocal, init_db
from app.models.product import Product
from app.models.sale import Sale
from app.services.data_store import DataStore
from app.services.product_service import create_product
from app.services.sale_service import record_sale

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        "serial_number": "MUG-001",
        "name": "Ceramic Mug",
        "cost_price": "5.00",
        "shipping_cost": "2.00",
        "sales_fee": "1.00",
        "selling_price": "20.00",
    },
    {
        "serial_number": "TPT-014",
        "name": "Cast Iron Teapot",
        "cost_price": "18.40",
        "shipping_cost": "6.50",
        "sales_fee": "3.10",
        "selling_price": "45.00",
    },
    {
        "serial_number": "CST-203",
        "name": "Cork Coaster Set",
        "cost_price": "2.10",
        "shipping_cost": "0.90",
        "sales_fee": "0.60",
        "selling_price": "3.50",
    },
]

# (product index, quantity, days ago)
SAMPLE_SALES = [
    (0, 3, 1),
    (1, 1, 2),
    (2, 10, 2),
    (0, 2, 5),
    (1, 2, 9),
]


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample products and sales.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    init_db()

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(Sale))
            db.execute(delete(Product))
            db.commit()

        if DataStore(db).count("products"):
            logger.info("Seed skipped: products already exist.")
            return

        products = [create_product(db, values) for values in SAMPLE_PRODUCTS]
        today = date.today()
        for index, quantity, days_ago in SAMPLE_SALES:
            record_sale(
                db,
                {
                    "product_id": products[index].id,
                    "quantity_sold": quantity,
                    "date": (today - timedelta(days=days_ago)).isoformat(),
                },
            )
        logger.info("Seed data created: %s products, %s sales.", len(products), len(SAMPLE_SALES))
    finally:
        db.close()


if __name__ == "__main__":
    main()
