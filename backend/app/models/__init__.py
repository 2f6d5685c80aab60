from app.models.product import Product
from app.models.customer import Customer
from app.models.sale import Sale

__all__ = ["Product", "Customer", "Sale"]
