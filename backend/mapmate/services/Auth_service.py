import logging
from mapmate.core.errors import BadRequestError, PersistenceError
from mapmate.core.logger import logs
from mapmate.core.security import create_access_token, hash_password, verify_password
from mapmate.models.auth_model import LoginRequest, RegisterRequest, UserRecord

INVALID_CREDENTIALS = "Invalid email or password"

class AuthService:
    def __init__(self, repo):
        # UserRepository or LocalRepository
        self.repo = repo

    async def register(self, request: RegisterRequest) -> UserRecord:
        try:
            if await self.repo.get_user_by_email(request.email) is not None:
                raise BadRequestError("Email is already registered")

            user = UserRecord(
                username=request.username,
                email=request.email,
                password_hash=await hash_password(request.password)
            )
            stored = await self.repo.create_user(user)
        except BadRequestError:
            raise
        except Exception as e:
            logs.log(logging.ERROR, f"Error registering user: {str(e)}")
            raise PersistenceError("Error registering user", details=str(e)) from e

        logs.log(logging.INFO, f"Registered user {stored.id}")
        return stored

    async def login(self, request: LoginRequest) -> str:
        try:
            user = await self.repo.get_user_by_email(request.email)
            if user is None or not await verify_password(request.password, user.password_hash):
                raise BadRequestError(INVALID_CREDENTIALS)
            token = create_access_token(user.id)
        except BadRequestError:
            raise
        except Exception as e:
            logs.log(logging.ERROR, f"Error logging in: {str(e)}")
            raise PersistenceError("Error logging in", details=str(e)) from e

        logs.log(logging.INFO, f"User {user.id} logged in")
        return token
