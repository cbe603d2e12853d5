"""SQLAlchemy ORM models for Order aggregate."""

from sqlalchemy import BigInteger, Column, DateTime, Index, Integer, Numeric, String

from .base import Base


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    # BIGINT identity on PostgreSQL, INTEGER PRIMARY KEY AUTOINCREMENT on SQLite
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    version = Column(BigInteger, nullable=False, default=0)
    status = Column(String(20), nullable=False)
    total_amount = Column(Numeric(19, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_orders_status_id", "status", "id"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self):
        return f"<OrderModel(id={self.id}, status={self.status}, version={self.version})>"
