from pydantic import BaseModel


class MarkReadForm(BaseModel):
    notification_id: int
