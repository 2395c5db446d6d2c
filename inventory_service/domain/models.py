from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import BigInteger, Integer, String, Text, Boolean, DateTime, func
from datetime import datetime
from typing import Optional

# BIGINT ids; sqlite only autoincrements INTEGER PRIMARY KEY
Identity = BigInteger().with_variant(Integer, "sqlite")

class Base(DeclarativeBase):
    pass

class Versioned:
    """Columns shared by every tenant-scoped, soft-deleted, versioned row."""
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False)
    version: Mapped[int] = mapped_column(Integer, default=1)
    created: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    modified: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    deleted: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

class Facility(Versioned, Base):
    __tablename__ = "facility"
    facility_id: Mapped[int] = mapped_column(Identity, primary_key=True, autoincrement=True)
    mservice_id: Mapped[int] = mapped_column(BigInteger, index=True)
    facility_name: Mapped[str] = mapped_column(String(255))
    json_data: Mapped[str] = mapped_column(Text, default="")

class SubareaType(Versioned, Base):
    __tablename__ = "subarea_type"
    # Caller-assigned id, unique per tenant
    mservice_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, index=True)
    subarea_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    subarea_type_name: Mapped[str] = mapped_column(String(255))

class ItemType(Versioned, Base):
    __tablename__ = "item_type"
    mservice_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, index=True)
    item_type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    item_type_name: Mapped[str] = mapped_column(String(255))

class Subarea(Versioned, Base):
    __tablename__ = "subarea"
    subarea_id: Mapped[int] = mapped_column(Identity, primary_key=True, autoincrement=True)
    mservice_id: Mapped[int] = mapped_column(BigInteger, index=True)
    # No foreign keys; referential integrity is not enforced by the store
    facility_id: Mapped[int] = mapped_column(BigInteger, index=True)
    parent_subarea_id: Mapped[int] = mapped_column(BigInteger, default=0)
    position: Mapped[int] = mapped_column(Integer, default=0)
    subarea_type_id: Mapped[int] = mapped_column(Integer, default=0)
    subarea_name: Mapped[str] = mapped_column(String(255))
    json_data: Mapped[str] = mapped_column(Text, default="")

class Product(Versioned, Base):
    __tablename__ = "product"
    product_id: Mapped[int] = mapped_column(Identity, primary_key=True, autoincrement=True)
    mservice_id: Mapped[int] = mapped_column(BigInteger, index=True)
    sku: Mapped[str] = mapped_column(String(100), default="")
    product_name: Mapped[str] = mapped_column(String(255))
    comment: Mapped[str] = mapped_column(Text, default="")
    json_data: Mapped[str] = mapped_column(Text, default="")

class InventoryItem(Versioned, Base):
    __tablename__ = "inventory_item"
    inventory_item_id: Mapped[int] = mapped_column(Identity, primary_key=True, autoincrement=True)
    mservice_id: Mapped[int] = mapped_column(BigInteger, index=True)
    subarea_id: Mapped[int] = mapped_column(BigInteger, index=True)
    item_type_id: Mapped[int] = mapped_column(Integer, default=0)
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    serial_number: Mapped[str] = mapped_column(String(100), default="")
    product_id: Mapped[int] = mapped_column(BigInteger, index=True)
    json_data: Mapped[str] = mapped_column(Text, default="")

class EntitySchema(Versioned, Base):
    __tablename__ = "entity_schema"
    mservice_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, index=True)
    entity_name: Mapped[str] = mapped_column(String(64), primary_key=True)
    json_schema: Mapped[str] = mapped_column(Text)
