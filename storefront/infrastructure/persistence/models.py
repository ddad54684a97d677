from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, registry

table_registry = registry()


@table_registry.mapped_as_dataclass
class Category:
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    created_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now())


@table_registry.mapped_as_dataclass
class Store:
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    is_holiday: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now())


@table_registry.mapped_as_dataclass
class Product:
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    i18n_name: Mapped[Optional[str]] = mapped_column(String(256), default=None)
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    i18n_description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    store_id: Mapped[Optional[int]] = mapped_column(ForeignKey("stores.id", ondelete="SET NULL"), default=None)
    created_at: Mapped[datetime] = mapped_column(init=False, server_default=func.now())


@table_registry.mapped_as_dataclass
class ProductCategory:
    __tablename__ = "products_categories"
    __table_args__ = (UniqueConstraint("product_id", "category_id"),)

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"))
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"))


@table_registry.mapped_as_dataclass
class Worktime:
    __tablename__ = "worktimes"

    id: Mapped[int] = mapped_column(init=False, primary_key=True)
    day_id: Mapped[int]
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"))
    am_open: Mapped[Optional[str]] = mapped_column(String(5), default=None)
    am_close: Mapped[Optional[str]] = mapped_column(String(5), default=None)
    pm_open: Mapped[Optional[str]] = mapped_column(String(5), default=None)
    pm_close: Mapped[Optional[str]] = mapped_column(String(5), default=None)
