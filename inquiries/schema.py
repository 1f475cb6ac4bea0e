from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

# Wire format uses camelCase (clientName, submissionDate, ...)
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# Inquiry Schemas
class InquiryBase(CamelModel):
    client_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    project_name: Optional[str] = None
    project_description: Optional[str] = None
    due_date: Optional[str] = None
    budget: Optional[float] = None
    duration: Optional[int] = None

    @field_validator("budget", "duration", mode="before")
    @classmethod
    def blank_number_is_none(cls, v):
        # HTML forms submit empty inputs as ""
        if isinstance(v, str) and not v.strip():
            return None
        return v

class InquiryCreate(InquiryBase):
    pass

class InquiryUpdate(InquiryBase):
    pass

class InquiryResponse(InquiryBase):
    id: int
    submission_date: datetime
    status: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class StatusUpdate(BaseModel):
    status: str

class SubmissionResponse(BaseModel):
    message: str = "Inquiry received"
    id: int

class ChangeResponse(BaseModel):
    message: str
    changes: int
