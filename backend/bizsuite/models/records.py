from __future__ import annotations
from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import Integer, String, DateTime, text
from typing import Optional

Base = declarative_base()


class TenantOwnedMixin:
    """Owning tenant columns; set once by the creating workflow and never reassigned."""
    group_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    company_id: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))


class Invoice(TenantOwnedMixin, Base):
    __tablename__ = 'invoices'
    STATUS_DRAFT = 'DRAFT'
    STATUS_ISSUED = 'ISSUED'
    STATUS_PAID = 'PAID'
    STATUS_CANCELLED = 'CANCELLED'
    ALL_STATUSES = (STATUS_DRAFT, STATUS_ISSUED, STATUS_PAID, STATUS_CANCELLED)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    number: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_DRAFT, index=True)


class PurchaseOrder(TenantOwnedMixin, Base):
    __tablename__ = 'purchase_orders'
    STATUS_DRAFT = 'DRAFT'
    STATUS_APPROVED = 'APPROVED'
    ALL_STATUSES = (STATUS_DRAFT, STATUS_APPROVED)
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    supplier_name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_DRAFT, index=True)
