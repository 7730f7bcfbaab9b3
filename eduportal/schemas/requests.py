from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eduportal.models import ComplaintStatus, LeaveStatus


class LeaveForm(BaseModel):
    start_date: date
    end_date: date
    reason: str = Field(min_length=1)


class LeaveOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_email: str
    requester_type: str
    start_date: date
    end_date: date
    reason: str
    status: str
    submitted_at: datetime
    processed_at: Optional[datetime] = None


class LeaveStatusForm(BaseModel):
    leave_id: int
    status: LeaveStatus


class ComplaintForm(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: Optional[str] = None


class ComplaintOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_email: str
    title: str
    description: str
    category: Optional[str] = None
    status: str
    submitted_at: datetime
    updated_at: Optional[datetime] = None


class ComplaintStatusForm(BaseModel):
    complaint_id: int
    status: ComplaintStatus


class ChatbotForm(BaseModel):
    message: str = Field(min_length=1)
