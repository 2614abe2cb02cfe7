from pydantic import BaseModel, Field, validator
from typing import Optional, List
from uuid import UUID
from datetime import datetime
from expense_ledger.shared.schemas.common import UserInfo, CategoryInfo, ProductInfo, EventInfo


def _clean_item_name(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError('Item name cannot be empty')
    return v


def _clean_remarks(v):
    return v.strip() if v is not None else v


class ExpenseCreateRequest(BaseModel):
    event_id: Optional[UUID] = Field(None, description="Event the expense belongs to")
    workshop_id: Optional[UUID] = Field(None, description="Workshop the expense belongs to")
    category_id: UUID = Field(..., description="Budget category")
    item_name: str = Field(..., max_length=255, description="Purchased item")
    quantity: float = Field(..., ge=0, allow_inf_nan=False, description="Units purchased")
    unit_price: float = Field(..., ge=0, allow_inf_nan=False, description="Price per unit")
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Total amount as computed by the client")
    remarks: Optional[str] = Field(None, description="Free text notes")
    product_id: Optional[UUID] = Field(None, description="Catalog product")

    @validator('item_name')
    def validate_item_name(cls, v):
        return _clean_item_name(v)

    @validator('remarks')
    def validate_remarks(cls, v):
        return _clean_remarks(v)

    class Config:
        json_schema_extra = {
            "example": {
                "event_id": "6f1c2a1e-8a43-4b8e-9d5b-0c2f3b7d9e10",
                "category_id": "0b8e7d6c-5a4f-4e3d-8c2b-1a0f9e8d7c6b",
                "item_name": "Coffee break",
                "quantity": 40,
                "unit_price": 3.5,
                "amount": 140,
                "remarks": "Morning session"
            }
        }


class BulkExpenseCreateRequest(BaseModel):
    expenses: List[ExpenseCreateRequest] = Field(..., min_length=1, description="Items to record")
    send_email: bool = Field(True, description="Notify the event coordinator once for the whole batch")


class ExpenseUpdateRequest(BaseModel):
    item_name: Optional[str] = Field(None, max_length=255)
    quantity: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    unit_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    remarks: Optional[str] = None

    @validator('item_name', 'quantity', 'unit_price', 'amount')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v

    @validator('item_name')
    def validate_item_name(cls, v):
        return _clean_item_name(v)

    @validator('remarks')
    def validate_remarks(cls, v):
        return _clean_remarks(v)

    def changes(self) -> dict:
        """Only the fields the client actually sent"""
        return self.dict(exclude_unset=True)


class ExpenseResponse(BaseModel):
    id: str
    event_id: Optional[str] = None
    workshop_id: Optional[str] = None
    category_id: str
    product_id: Optional[str] = None
    added_by_id: str
    item_name: str
    quantity: float
    unit_price: float
    amount: float
    remarks: Optional[str] = None
    created_at: datetime
    category: CategoryInfo
    added_by: UserInfo
    product: Optional[ProductInfo] = None
    event: Optional[EventInfo] = None

    class Config:
        from_attributes = True


class ExpenseSummaryItem(BaseModel):
    category: CategoryInfo
    budget_amount: float
    total_expense: float
    remaining: float
    expense_count: int
    budgeted: bool = True

    class Config:
        from_attributes = True
