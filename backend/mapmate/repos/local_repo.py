"""
Local file-based repository for users and comments.
Uses JSON files instead of MongoDB.
"""
import json
import uuid
from pathlib import Path
from typing import List, Optional

from mapmate.core.config import settings
from mapmate.core.errors import PersistenceError
from mapmate.core.logger import logs
from mapmate.models.auth_model import UserRecord
from mapmate.models.comment_model import Comment, CommentCreate
import logging


class LocalRepository:
    """Repository for storing data in local JSON files."""

    def __init__(self, base_dir: str = None):
        """Initialize local storage directory."""
        self.base_dir = Path(base_dir or settings.LOCAL_DATA_DIR)
        self.users_file = self.base_dir / "users.json"
        self.comments_file = self.base_dir / "comments.json"

        self.base_dir.mkdir(parents=True, exist_ok=True)

        logs.log(logging.INFO, f"Local file repository initialized at {self.base_dir}")

    def _load(self, path: Path) -> list:
        if not path.exists():
            return []
        try:
            with open(path, "r") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logs.log(logging.ERROR, f"Failed to read {path.name}: {str(e)}")
            raise PersistenceError(f"Failed to read {path.name}", details=str(e)) from e

    def _save(self, path: Path, records: list):
        try:
            with open(path, "w") as f:
                json.dump(records, f, indent=2)
        except OSError as e:
            logs.log(logging.ERROR, f"Failed to write {path.name}: {str(e)}")
            raise PersistenceError(f"Failed to write {path.name}", details=str(e)) from e

    # ===== User Methods =====

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for record in self._load(self.users_file):
            if record.get("email") == email:
                return UserRecord(**record)
        return None

    async def create_user(self, user: UserRecord) -> UserRecord:
        users = self._load(self.users_file)
        stored = user.model_copy(update={"id": uuid.uuid4().hex})
        users.append(stored.model_dump())
        self._save(self.users_file, users)
        return stored

    # ===== Comment Methods =====

    async def create_comment(self, comment: CommentCreate) -> Comment:
        comments = self._load(self.comments_file)
        stored = Comment(id=uuid.uuid4().hex, **comment.model_dump())
        comments.append(stored.model_dump(mode="json", by_alias=True))
        self._save(self.comments_file, comments)
        return stored

    async def list_comments(self) -> List[Comment]:
        return [Comment(**record) for record in self._load(self.comments_file)]

