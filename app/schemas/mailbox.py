from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class AddressRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    created_at: float

class Message(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    from_: str = Field(..., alias="from")
    subject: str
    body: str
    timestamp: int  # epoch milliseconds

class ReceiveRequest(BaseModel):
    # All optional so that missing fields surface as a 400, not a 422
    model_config = ConfigDict(populate_by_name=True)

    to: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    subject: Optional[str] = None
    body: Optional[str] = None

    def missing_fields(self) -> List[str]:
        values = {"to": self.to, "from": self.from_, "subject": self.subject, "body": self.body}
        return [name for name, value in values.items() if not value]

class GenerateResponse(BaseModel):
    email: str

class InboxResponse(BaseModel):
    messages: List[Message] = []

class ReceiveResponse(BaseModel):
    success: bool = True
    message: str = "Email received"

class HealthResponse(BaseModel):
    status: str = "ok"
    active_addresses: int = 0
