from fastapi import APIRouter, Depends

from mapmate.models.auth_model import LoginRequest, MessageResponse, RegisterRequest, TokenResponse
from mapmate.routes.dependencies import get_auth_service
from mapmate.services.Auth_service import AuthService

router = APIRouter(prefix="/api")

@router.post("/register", response_model=MessageResponse, status_code=201)
async def register_endpoint(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    await service.register(request)
    return MessageResponse(message="User registered successfully")

@router.post("/login", response_model=TokenResponse)
async def login_endpoint(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return TokenResponse(token=await service.login(request))
