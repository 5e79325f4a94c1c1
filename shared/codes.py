"""
业务状态码（HTTP 响应体 code 字段与 gRPC x-biz-code 尾部元数据共用）

按段划分：1xxxx 输入错误，2xxxx 实体与状态冲突，3xxxx 访问拒绝，4xxxx 系统故障。
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """业务状态码定义（单一来源）"""

    SUCCESS = 0

    # 输入缺失或格式错误 (1xxxx)
    PARAM_MISSING = 10001
    PARAM_VALIDATION_ERROR = 10003
    INVALID_EMAIL = 10010
    UNKNOWN_CITY = 10011
    UNKNOWN_PRODUCT_CATEGORY = 10012
    UNKNOWN_ROLE = 10013

    # 实体不存在 (200xx)
    NOT_FOUND = 20000
    USER_NOT_FOUND = 20001
    PVZ_NOT_FOUND = 20007
    RECEPTION_NOT_FOUND = 20008

    # 状态冲突 (201xx)
    USER_ALREADY_EXISTS = 20103
    RECEPTION_ALREADY_OPENED = 20100
    RECEPTION_CLOSED = 20101
    RECEPTION_EMPTY = 20102

    # 凭据与访问控制 (3xxxx)
    PASSWORD_ERROR = 30003
    TOKEN_INVALID = 30004
    TOKEN_EXPIRED = 30005
    UNAUTHORIZED = 30001
    FORBIDDEN = 30002

    # 系统故障 (4xxxx)
    SYSTEM_ERROR = 40000
    DATABASE_ERROR = 40001
    SERVICE_UNAVAILABLE = 40003


__all__ = ["BusinessCode"]
