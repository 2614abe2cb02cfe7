# expense_ledger/shared/database/models.py
import uuid
from enum import Enum

from sqlalchemy import (
    Column, String, Boolean, DateTime, Text, Float, ForeignKey,
    UniqueConstraint, func
)
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid.uuid4())


class UserRole(str, Enum):
    """Roles known to the ledger"""
    ADMIN = "ADMIN"
    FACILITIES_TEAM = "FACILITIES_TEAM"
    FINANCE_TEAM = "FINANCE_TEAM"
    EVENT_COORDINATOR = "EVENT_COORDINATOR"
    STAFF = "STAFF"


# =====================================================
# USERS
# =====================================================

class User(Base):
    """User of the platform"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(50), nullable=False, default=UserRole.STAFF.value)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    expenses = relationship("Expense", back_populates="added_by")
    coordinated_events = relationship("Event", back_populates="coordinator")


# =====================================================
# EVENTS AND WORKSHOPS
# =====================================================

class Event(Base):
    """Event with budgets and expenses"""
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    coordinator_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    coordinator = relationship("User", back_populates="coordinated_events")
    budgets = relationship("Budget", back_populates="event")
    expenses = relationship("Expense", back_populates="event")


class Workshop(Base):
    """Workshop that can also carry expenses"""
    __tablename__ = "workshops"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    expenses = relationship("Expense", back_populates="workshop")


# =====================================================
# CATEGORIES, BUDGETS AND PRODUCTS
# =====================================================

class Category(Base):
    """Label grouping budgets and expenses"""
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text)

    budgets = relationship("Budget", back_populates="category")
    expenses = relationship("Expense", back_populates="category")


class Budget(Base):
    """Requested (and optionally approved) spend for a category of an event"""
    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("event_id", "category_id", name="uq_budget_event_category"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    amount = Column(Float, nullable=False)
    approved_amount = Column(Float, nullable=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    event = relationship("Event", back_populates="budgets")
    category = relationship("Category", back_populates="budgets")

    @property
    def effective_amount(self) -> float:
        """Approved amount when present, requested amount otherwise"""
        if self.approved_amount is not None:
            return self.approved_amount
        return self.amount


class Product(Base):
    """Catalog product an expense can reference"""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    unit_price = Column(Float)

    expenses = relationship("Expense", back_populates="product")


# =====================================================
# EXPENSES
# =====================================================

class Expense(Base):
    """Recorded cost item"""
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=True, index=True)
    workshop_id = Column(String(36), ForeignKey("workshops.id"), nullable=True, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    added_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=True)

    item_name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    # Stored as sent by the client, never recomputed from quantity * unit_price
    amount = Column(Float, nullable=False)
    remarks = Column(Text)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    # Relationships
    event = relationship("Event", back_populates="expenses")
    workshop = relationship("Workshop", back_populates="expenses")
    category = relationship("Category", back_populates="expenses")
    added_by = relationship("User", back_populates="expenses")
    product = relationship("Product", back_populates="expenses")
