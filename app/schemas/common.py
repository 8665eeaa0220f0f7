"""Small reference schemas embedded in larger responses."""
from typing import Optional
from pydantic import BaseModel


class AccountRef(BaseModel):
    """Creator reference: id and email only."""
    id: str
    email: str

    class Config:
        from_attributes = True


class AdminRef(BaseModel):
    """Admin summary shown next to a tenant."""
    id: str
    email: str
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


class NamedRef(BaseModel):
    """id/name pair for optional related rows."""
    id: str
    name: str

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    """Envelope returned for every handled error."""
    success: bool = False
    detail: str
    error: str
    status_code: int
    path: str
    timestamp: str
    errors: Optional[list] = None


class MessageResponse(BaseModel):
    """Acknowledgement for operations without a body."""
    success: bool = True
    message: str
