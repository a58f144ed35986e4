import logging
from typing import List
from mapmate.core.errors import PersistenceError
from mapmate.core.logger import logs
from mapmate.models.comment_model import Comment, CommentCreate

class CommentService:
    def __init__(self, repo):
        # CommentRepository or LocalRepository
        self.repo = repo

    async def add_comment(self, comment: CommentCreate) -> Comment:
        try:
            saved = await self.repo.create_comment(comment)
        except Exception as e:
            logs.log(logging.ERROR, f"Error saving comment: {str(e)}")
            raise PersistenceError("Error saving comment", details=str(e)) from e
        logs.log(logging.INFO, f"Saved comment {saved.id} at {saved.position.lat}, {saved.position.lng}")
        return saved

    async def get_comments(self) -> List[Comment]:
        try:
            return await self.repo.list_comments()
        except Exception as e:
            logs.log(logging.ERROR, f"Error retrieving comments: {str(e)}")
            raise PersistenceError("Error retrieving comments", details=str(e)) from e
