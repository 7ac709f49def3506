from sqlalchemy import Column, DateTime, Index, Integer, Numeric, String

from app.core.dates import utc_now
from app.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)

    # Not unique: duplicates are accepted as entered.
    serial_number = Column(String(120), nullable=False)
    name = Column(String(255), nullable=False)

    cost_price = Column(Numeric(12, 2), nullable=False, default=0)
    shipping_cost = Column(Numeric(12, 2), nullable=False, default=0)
    sales_fee = Column(Numeric(12, 2), nullable=False, default=0)
    selling_price = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    __table_args__ = (
        Index("idx_products_serial_number", "serial_number"),
        Index("idx_products_name", "name"),
    )

    def __repr__(self):
        return f"<Product {self.id} {self.serial_number} {self.name}>"


__all__ = ["Product"]
