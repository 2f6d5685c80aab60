from datetime import datetime

from sqlalchemy import Column, Integer, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.database import Base


class Sale(Base):
    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_sales_quantity_positive"),
    )

    id = Column(Integer, primary_key=True)
    sale_date = Column(DateTime, nullable=False, default=datetime.now)
    quantity = Column(Integer, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    # Relationships (no cascade: referenced parents cannot be deleted)
    customer = relationship("Customer")
    product = relationship("Product")
