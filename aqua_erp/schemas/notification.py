from pydantic import BaseModel
from typing import List, Optional


class NotificationResponse(BaseModel):
    status: bool = True
    notifications: Optional[List[str]] = None
    message: Optional[str] = None
