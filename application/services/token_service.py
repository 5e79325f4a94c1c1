"""
令牌服务 - 签发与解析 JWT 访问令牌

令牌格式只在这里出现；其他层只把令牌当作不透明字符串。
"""
from typing import Optional
from datetime import datetime, timedelta, timezone
import jwt
import uuid

from core.config import settings
from core.exceptions import TokenExpiredException, TokenInvalidException
from core.logging_config import get_logger


logger = get_logger(__name__)


class TokenService:
    """JWT 访问令牌服务（HS256，sub 为用户 UUID）"""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
        issuer: Optional[str] = None,
    ):
        self._secret_key = secret_key or settings.SECRET_KEY
        self._algorithm = algorithm or settings.ALGORITHM
        self._expire_minutes = expire_minutes if expire_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self._issuer = issuer or settings.JWT_ISSUER

    @property
    def expires_in(self) -> int:
        """访问令牌有效期（秒）"""
        return self._expire_minutes * 60

    def create_access_token(self, user_id: uuid.UUID) -> str:
        """创建访问令牌"""
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "iss": self._issuer,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
            "type": "access",
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def decode_user_id(self, token: str) -> uuid.UUID:
        """解析访问令牌，返回用户ID

        - 过期：TokenExpiredException
        - 签名错误、格式错误、类型不符或缺少 sub：TokenInvalidException
        """
        if not token:
            raise TokenInvalidException("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredException()
        except jwt.InvalidTokenError as e:
            logger.info("invalid_access_token", error=str(e))
            raise TokenInvalidException()

        if payload.get("type") != "access":
            raise TokenInvalidException("Token type mismatch")
        try:
            return uuid.UUID(str(payload["sub"]))
        except ValueError:
            raise TokenInvalidException("Token subject is not a user id")
