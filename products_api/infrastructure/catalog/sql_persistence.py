"""
Adapter: SQL product mirror.

Implements the ProductPersistence port with SQLAlchemy Core.
Keeps a durable copy of the product collection so a restarted process
can hydrate its in-memory store. Works with any SQLAlchemy dialect
(PostgreSQL in deployment, SQLite in tests).
"""

import logging

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from products_api.domain.catalog.entities import Product
from products_api.domain.catalog.ports import PersistenceError, ProductPersistence

logger = logging.getLogger(__name__)

metadata = MetaData()

products_table = Table(
    "products",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", String(36), nullable=False, unique=True),
    Column("name", String(100), nullable=False),
    Column("description", String(1000), nullable=False),
    Column("price", Float, nullable=False),
    Column("category", String(50), nullable=False),
    Column("in_stock", Boolean, nullable=False),
)


def build_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the configured database URL."""
    return create_engine(database_url, pool_pre_ping=True)


class SqlProductPersistence(ProductPersistence):
    """Mirrors products into the ``products`` table.

    Rows keep an auto-incrementing ``seq`` so reloads preserve
    insertion order.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def ping(self) -> None:
        """Check connectivity and create the table if it is missing.

        Raises:
            PersistenceError: If the database cannot be reached.
        """
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Database unreachable: {exc}") from exc
        logger.info("Product persistence reachable.")

    def load_all(self) -> list[Product]:
        query = select(products_table).order_by(products_table.c.seq)
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load products: {exc}") from exc

        return [
            Product(
                id=row["id"],
                name=row["name"],
                description=row["description"],
                price=float(row["price"]),
                category=row["category"],
                in_stock=bool(row["in_stock"]),
            )
            for row in rows
        ]

    def save(self, product: Product) -> None:
        """Insert or replace a product, keeping its original position."""
        values = {
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "category": product.category,
            "in_stock": product.in_stock,
        }
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(products_table)
                    .where(products_table.c.id == product.id)
                    .values(**values)
                )
                if result.rowcount == 0:
                    conn.execute(insert(products_table).values(id=product.id, **values))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not save product {product.id}: {exc}") from exc

        logger.debug("Persisted product id=%s.", product.id)

    def remove(self, product_id: str) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    delete(products_table).where(products_table.c.id == product_id)
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not delete product {product_id}: {exc}") from exc
