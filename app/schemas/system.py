from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DatabaseStatus(BaseModel):
    ok: bool
    dialect: str
    error: Optional[str] = None


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    uptime_seconds: float
    database: DatabaseStatus
