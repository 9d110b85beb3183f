from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderOut(_CamelModel):
    id: int
    transaction_id: Optional[int] = Field(None, alias="transactionId")
    status: Optional[str] = None
    customer_email: str = Field(..., alias="customerEmail")
    service_id: Optional[str] = Field(None, alias="serviceId")
    service_name: str = Field(..., alias="serviceName")
    booking_id: Optional[int] = Field(None, alias="bookingId")
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class TransactionOut(_CamelModel):
    id: int
    reference: str
    amount: float
    currency: Optional[str] = None
    status: str
    service_id: Optional[str] = Field(None, alias="serviceId")
    service_name: str = Field(..., alias="serviceName")
    customer_email: str = Field(..., alias="customerEmail")
    metadata: Optional[Any] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")
    order: Optional[OrderOut] = None


class ErrorOut(BaseModel):
    error: str
