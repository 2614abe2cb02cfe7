# expense_ledger/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[List[Dict[str, Any]]] = None

class MessageResponse(BaseResponse):
    success: bool = True

class UserInfo(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True

class CategoryInfo(BaseModel):
    id: str
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True

class ProductInfo(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    unit_price: Optional[float] = None

    class Config:
        from_attributes = True

class EventInfo(BaseModel):
    id: str
    title: str

    class Config:
        from_attributes = True
