# portfolio_contact/modules/contact/schemas.py

from typing import List, Literal, Optional
from pydantic import BaseModel

IssueKind = Literal["required", "type", "empty", "min-length", "max-length", "format", "unknown"]

class ContactSubmission(BaseModel):
    name: str
    email: str
    message: str

class ValidationIssue(BaseModel):
    field: str
    kind: IssueKind
    message: str

class DispatchResult(BaseModel):
    owner_sent: bool = False
    client_sent: bool = False
    failed_step: Optional[Literal["owner_notification", "client_confirmation"]] = None

    @property
    def delivered(self) -> bool:
        return self.owner_sent and self.client_sent

class ContactFormResponse(BaseModel):
    success: bool = True

class ContactFailureResponse(BaseModel):
    success: bool = False
    error: str

class ValidationErrorResponse(BaseModel):
    errors: List[str]
