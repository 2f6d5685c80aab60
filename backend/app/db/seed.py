import asyncio
import random
from datetime import datetime, timedelta
from decimal import Decimal
from sqlalchemy import select
from app.db.database import async_session, init_db
from app.models import Product, Customer, Sale


# Sample products
PRODUCTS_DATA = [
    ("Laptop", Decimal("1199.99")),
    ("Wireless Mouse", Decimal("24.99")),
    ("Mechanical Keyboard", Decimal("89.99")),
    ("27in Monitor", Decimal("299.99")),
    ("USB-C Dock", Decimal("149.99")),
    ("Webcam", Decimal("59.99")),
    ("Headset", Decimal("79.99")),
    ("Desk Lamp", Decimal("34.99")),
]

# Sample customers
CUSTOMERS_DATA = [
    ("Alice Johnson", "alice.johnson@example.com"),
    ("Bob Smith", "bob.smith@example.com"),
    ("Carla Gomez", "carla.gomez@example.com"),
    ("Deepak Rao", "deepak.rao@example.com"),
    ("Emma Brown", "emma.brown@example.com"),
    ("Farid Haddad", "farid.haddad@example.com"),
]

SALES_COUNT = 60


async def seed_database():
    await init_db()

    async with async_session() as session:
        # Check if data exists
        result = await session.execute(select(Product).limit(1))
        if result.scalar():
            print("Database already seeded")
            return

        products = [Product(product_name=name, price=price) for name, price in PRODUCTS_DATA]
        customers = [Customer(full_name=name, email=email) for name, email in CUSTOMERS_DATA]
        session.add_all(products + customers)

        await session.flush()  # Get IDs

        # Spread sales over the last 90 days
        now = datetime.now()
        for _ in range(SALES_COUNT):
            session.add(Sale(
                customer_id=random.choice(customers).id,
                product_id=random.choice(products).id,
                quantity=random.randint(1, 5),
                sale_date=now - timedelta(days=random.randint(0, 90), minutes=random.randint(0, 1440)),
            ))

        await session.commit()
        print("Database seeded successfully!")


if __name__ == "__main__":
    asyncio.run(seed_database())
