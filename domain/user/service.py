"""
用户领域服务 - 密码处理
"""
import hashlib
import hmac
import secrets


class PasswordService:
    """密码服务 - 处理密码相关的业务逻辑"""

    ITERATIONS = 100000

    @staticmethod
    def hash_password(password: str) -> str:
        """密码哈希"""
        salt = secrets.token_hex(32)
        pwd_hash = hashlib.pbkdf2_hmac('sha256',
                                       password.encode('utf-8'),
                                       salt.encode('utf-8'),
                                       PasswordService.ITERATIONS)
        return f"{salt}${pwd_hash.hex()}"

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """验证密码（格式错误的哈希视为不匹配）"""
        salt, sep, pwd_hash = (hashed_password or "").partition('$')
        if not sep:
            return False
        new_hash = hashlib.pbkdf2_hmac('sha256',
                                       plain_password.encode('utf-8'),
                                       salt.encode('utf-8'),
                                       PasswordService.ITERATIONS)
        return hmac.compare_digest(new_hash.hex(), pwd_hash)
