from datetime import datetime
from typing import Any, Dict, List
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel


class BibleImageRecord(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(index=True)
    output_path: str
    image_path: str
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=False), default=datetime.utcnow),
    )
    references: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    highlights: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
