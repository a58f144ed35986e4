from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional
from mapmate.models.auth_model import UserRecord

class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["users"]

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        doc = await self.collection.find_one({"email": email})
        if doc is None:
            return None
        doc["id"] = str(doc.pop("_id"))
        return UserRecord(**doc)

    async def create_user(self, user: UserRecord) -> UserRecord:
        result = await self.collection.insert_one(user.model_dump(exclude={"id"}))
        return user.model_copy(update={"id": str(result.inserted_id)})
