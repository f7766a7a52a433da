"""
Notices raised by client flows (the toast of the web app).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notice(BaseModel):
    title: str
    description: Optional[str] = None
    variant: NoticeVariant = NoticeVariant.DEFAULT
