from pydantic import BaseModel, Field
from typing import List
from enum import Enum

# --- Enums ---
class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

# --- Domain Models ---
class ChatMessage(BaseModel):
    role: Role
    content: str

# --- API Request/Response Models ---
class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User's input message")
    history: List[str] = Field(default_factory=list, description="Previous turns, user first, alternating")

class ChatResponse(BaseModel):
    message: str

class ExtractLocationsRequest(BaseModel):
    text: str = Field(..., min_length=1)

class ExtractLocationsResponse(BaseModel):
    locations: List[str]

class SummaryRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

class SummaryResponse(BaseModel):
    summary: str
