from pathlib import Path


APP_DIR = Path(__file__).resolve().parents[1]

TEMPLATES_DIR = APP_DIR / "templates"

TABLE_PRODUCTS = "products"
TABLE_SALES = "sales"

MONEY_FIELDS = ("cost_price", "shipping_cost", "sales_fee", "selling_price")

DEFAULT_DASHBOARD_PATH = "/dashboard"

# Largest signed 64-bit INTEGER the database can bind.
MAX_INT = 2**63 - 1
