from datetime import datetime
from pydantic import BaseModel


class ErrorBody(BaseModel):
    message: str
    code: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: ErrorBody

    @classmethod
    def build(cls, message: str, code: str) -> "ErrorResponse":
        return cls(error=ErrorBody(message=message, code=code, timestamp=datetime.utcnow()))
