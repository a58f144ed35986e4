from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List
from mapmate.models.comment_model import Comment, CommentCreate

class CommentRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["comments"]

    async def create_comment(self, comment: CommentCreate) -> Comment:
        """
        Inserts the comment as-is. expiryTime is stored, never acted on.
        """
        doc = comment.model_dump(by_alias=True)
        result = await self.collection.insert_one(doc)
        return Comment(id=str(result.inserted_id), **comment.model_dump())

    async def list_comments(self) -> List[Comment]:
        comments = []
        async for doc in self.collection.find():
            doc["id"] = str(doc.pop("_id"))
            comments.append(Comment(**doc))
        return comments
