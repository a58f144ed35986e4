from typing import List
from fastapi import APIRouter, Depends

from mapmate.models.comment_model import Comment, CommentCreate, CommentCreatedResponse
from mapmate.routes.dependencies import get_comment_service
from mapmate.services.Comment_service import CommentService

router = APIRouter(prefix="/api")

@router.post("/comments", response_model=CommentCreatedResponse, status_code=201)
async def create_comment_endpoint(
    request: CommentCreate,
    service: CommentService = Depends(get_comment_service)
):
    comment = await service.add_comment(request)
    return CommentCreatedResponse(message="Comment saved successfully", comment=comment)

@router.get("/comments", response_model=List[Comment])
async def list_comments_endpoint(service: CommentService = Depends(get_comment_service)):
    return await service.get_comments()
