from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from mapmate.models.geo_model import Coordinate

class CommentCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user: str = "Anonymous"
    position: Coordinate
    content: str = Field(..., min_length=1)
    # Stored as metadata only, nothing deletes expired comments
    expiry_time: Optional[datetime] = None

class Comment(CommentCreate):
    id: str

class CommentCreatedResponse(BaseModel):
    message: str
    comment: Comment
