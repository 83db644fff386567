# services/auth_service.py

import secrets
from typing import Optional

from ..core.config import settings
from ..core.passwords import hash_password, verify_password
from ..schemas.auth_schemas import LoginResponse
from ..utils.exceptions import AuthenticationError
from common.cache import CacheInterface
from common.logger import LoggerFactory, LoggerType, LogLevel


class AuthService:
    """
    Single-admin login issuing opaque bearer tokens.
    Tokens live in a cache and expire after ``token_ttl`` seconds.
    """

    def __init__(
        self,
        token_cache: CacheInterface,
        username: str,
        password_hash: Optional[str] = None,
        password: Optional[str] = None,
        token_ttl: int = 3600,
        iterations: int = 150000,
    ):
        """
        Initialize auth service

        Args:
            token_cache: Cache storing issued tokens
            username: Admin username
            password_hash: Encoded PBKDF2 hash of the admin password
            password: Plain admin password, hashed here when no hash is given
            token_ttl: Token lifetime in seconds
            iterations: PBKDF2 iterations used when hashing ``password``
        """
        self.token_cache = token_cache
        self.username = username
        self.token_ttl = token_ttl
        self.logger = LoggerFactory.get_logger(
            name="auth-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}auth_service.log",
        )

        if password_hash:
            self.password_hash = password_hash
        elif password:
            self.password_hash = hash_password(password, iterations)
        else:
            self.password_hash = None
            self.logger.warning("No admin password configured; login is disabled")

    async def login(self, username: str, password: str) -> LoginResponse:
        """
        Exchange credentials for a token

        Raises:
            AuthenticationError: Unknown user or wrong password
        """
        if (
            not self.password_hash
            or not secrets.compare_digest((username or "").encode("utf-8"), self.username.encode("utf-8"))
            or not verify_password(password or "", self.password_hash)
        ):
            self.logger.warning(f"Failed login attempt for user '{username}'")
            raise AuthenticationError("Invalid credentials")

        token = secrets.token_urlsafe(32)
        await self.token_cache.set(f"token:{token}", username, ttl=self.token_ttl)
        self.logger.info(f"User '{username}' logged in")
        return LoginResponse(token=token, expires_in=self.token_ttl)

    async def verify_token(self, token: Optional[str]) -> str:
        """
        Resolve a token to its username

        Raises:
            AuthenticationError: Missing, unknown or expired token
        """
        if not token:
            raise AuthenticationError("Not authenticated")
        username = await self.token_cache.get(f"token:{token}")
        if username is None:
            raise AuthenticationError("Not authenticated")
        return username

    async def logout(self, token: str) -> bool:
        return await self.token_cache.delete(f"token:{token}")
