from fastapi import Depends

from mapmate.core.config import settings
from mapmate.core.db_connection import get_db
from mapmate.repos.comments_repo import CommentRepository
from mapmate.repos.local_repo import LocalRepository
from mapmate.repos.users_repo import UserRepository
from mapmate.services.Auth_service import AuthService
from mapmate.services.Comment_service import CommentService
from mapmate.services.Places_service import PlacesService
from mapmate.services.places_client import PlacesClient

# --- Dependency Injection Helpers ---
async def get_user_repository():
    """Get the appropriate repository based on storage mode."""
    if settings.STORAGE_MODE == "local":
        return LocalRepository()
    db = await get_db()
    return UserRepository(db)

async def get_comment_repository():
    if settings.STORAGE_MODE == "local":
        return LocalRepository()
    db = await get_db()
    return CommentRepository(db)

def get_places_client() -> PlacesClient:
    return PlacesClient()

def get_places_service(client: PlacesClient = Depends(get_places_client)) -> PlacesService:
    return PlacesService(client)

def get_auth_service(repo=Depends(get_user_repository)) -> AuthService:
    return AuthService(repo)

def get_comment_service(repo=Depends(get_comment_repository)) -> CommentService:
    return CommentService(repo)
