from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric
from sqlalchemy.orm import relationship

from app.core.dates import utc_now
from app.database.base import Base
from app.models.product import Product  # noqa: F401


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)

    # Plain reference, no FOREIGN KEY: deleting a product keeps its sales.
    product_id = Column(Integer, nullable=False)

    quantity_sold = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)

    # Snapshot taken when the sale is recorded; never recomputed.
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)
    profit = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    product = relationship(
        "Product",
        primaryjoin="foreign(Sale.product_id) == Product.id",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (
        Index("idx_sales_product", "product_id"),
        Index("idx_sales_date", "date"),
    )

    def __repr__(self):
        return f"<Sale {self.id} product={self.product_id} qty={self.quantity_sold} date={self.date}>"


__all__ = ["Sale"]
