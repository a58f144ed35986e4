from pydantic import BaseModel, Field
from typing import Optional

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)

class LoginRequest(BaseModel):
    email: str
    password: str

class MessageResponse(BaseModel):
    message: str

class TokenResponse(BaseModel):
    token: str

# --- Database Models ---
class UserRecord(BaseModel):
    id: Optional[str] = None
    username: str
    email: str
    password_hash: str
