"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from riderdispatch.adapters.persistence.database import Base


class ZoneModel(Base):
    __tablename__ = "zones"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    riders: Mapped[list["RiderModel"]] = relationship(back_populates="zone")


class RiderModel(Base):
    __tablename__ = "riders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="offline")
    zone_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("zones.id"), nullable=True
    )
    active_orders: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    zone: Mapped["ZoneModel | None"] = relationship(back_populates="riders")

    __table_args__ = (
        Index("idx_riders_zone_status_load", "zone_id", "status", "active_orders"),
    )


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    pickup_address: Mapped[str] = mapped_column(Text, nullable=False)
    pickup_zone_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("zones.id"), nullable=True
    )
    assignment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="unassigned"
    )
    assigned_rider_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("riders.id"), nullable=True
    )
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    assignment_timeout_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_orders_assignment_timeout", "assignment_status", "assignment_timeout_at"),
    )
