# portfolio/db/models.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from .session import Base


class Transaction(Base):
    __tablename__ = "transactions"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference = Column(String(100), unique=True, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), default="NGN")
    status = Column(String(20), nullable=False)
    service_id = Column(String(50))
    service_name = Column(String(100), nullable=False)
    customer_email = Column(String(100), nullable=False)
    # "metadata" is reserved on declarative classes
    metadata_json = Column("metadata", JSON)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # One-to-one: the order created when this payment was verified
    order = relationship("Order", back_populates="transaction", uselist=False)


class Order(Base):
    __tablename__ = "orders"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), unique=True)
    status = Column(String(20), default="pending")
    customer_email = Column(String(100), nullable=False)
    service_id = Column(String(50))
    service_name = Column(String(100), nullable=False)
    booking_id = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    transaction = relationship("Transaction", back_populates="order")


class SiteSetting(Base):
    __tablename__ = "site_settings"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(Text)
    category = Column(String(50), default="general")
    description = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
