from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class HighlightRegion(CamelModel):
    verse: str
    text: str
    x: int
    y: int
    width: int
    height: int


class BibleImageRecordRead(CamelModel):
    id: str
    name: str
    output_path: str
    image_path: str
    created_at: Optional[datetime] = None
    references: List[str] = Field(default_factory=list)
    highlights: List[HighlightRegion] = Field(default_factory=list)


class CreateRecordResponse(CamelModel):
    id: str
    message: str


class ResolveRequest(CamelModel):
    text: str = ""
    passages: Optional[str] = None
    passages_mode: str = "text"


class ResolveResponse(CamelModel):
    references: List[str]
