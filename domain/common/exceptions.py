"""领域层业务异常定义，供领域与基础设施使用。

异常按“种类”分为五个中间基类（访问拒绝、未找到、参数非法、状态冲突、基础设施），
传输层只需做一次种类判断（见 ``is_access_error``），不必逐个异常映射。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class AccessDeniedException(BusinessException):
    """认证或角色校验失败"""


class NotFoundException(BusinessException):
    """引用的实体不存在"""


class InvalidArgumentException(BusinessException):
    """输入缺失或格式错误"""


class ConflictingStateException(BusinessException):
    """操作违反实体生命周期约束"""


class InfrastructureException(BusinessException):
    """存储或凭据服务故障，领域层不再细分"""

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(
            code=BusinessCode.DATABASE_ERROR,
            message=message,
            error_type="InfrastructureError",
            details=details,
        )


def is_access_error(exc: BaseException) -> bool:
    """传输层唯一需要的分类：访问拒绝 vs 其他。"""
    return isinstance(exc, AccessDeniedException)


# ---------------------------------------------------------------------------
# AccessDenied
# ---------------------------------------------------------------------------
class InsufficientPrivilegesException(AccessDeniedException):
    def __init__(self):
        super().__init__(
            code=BusinessCode.FORBIDDEN,
            message="user has insufficient privileges",
            error_type="InsufficientPrivileges",
        )


class BadUserCredentialException(AccessDeniedException):
    def __init__(self):
        super().__init__(
            code=BusinessCode.PASSWORD_ERROR,
            message="bad user credentials",
            error_type="BadUserCredential",
        )


# ---------------------------------------------------------------------------
# NotFound
# ---------------------------------------------------------------------------
class UserNotFoundException(NotFoundException):
    def __init__(self, user_id: Optional[str] = None):
        details = {"user_id": user_id} if user_id else None
        super().__init__(
            code=BusinessCode.USER_NOT_FOUND,
            message="user does not exist",
            error_type="UserDoesNotExist",
            details=details,
        )


class PVZNotFoundException(NotFoundException):
    def __init__(self, pvz_id: Optional[str] = None):
        details = {"pvz_id": pvz_id} if pvz_id else None
        super().__init__(
            code=BusinessCode.PVZ_NOT_FOUND,
            message="pvz was not found",
            error_type="PVZDoesNotExist",
            details=details,
        )


class ReceptionNotFoundException(NotFoundException):
    def __init__(self, reception_id: Optional[str] = None):
        details = {"reception_id": reception_id} if reception_id else None
        super().__init__(
            code=BusinessCode.RECEPTION_NOT_FOUND,
            message="reception does not exist",
            error_type="ReceptionDoesNotExist",
            details=details,
        )


# ---------------------------------------------------------------------------
# InvalidArgument
# ---------------------------------------------------------------------------
class RequiredFieldException(InvalidArgumentException):
    def __init__(self, field: str, message: str, error_type: str = "RequiredField"):
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message=message,
            error_type=error_type,
            field=field,
        )


class IdIsRequiredException(RequiredFieldException):
    def __init__(self, field: str = "pvzId"):
        super().__init__(field, "id is required", error_type="IdIsRequired")


class RegistrationTimeIsRequiredException(RequiredFieldException):
    def __init__(self):
        super().__init__(
            "registrationDate",
            "registration time is required for creation",
            error_type="RegistrationTimeIsRequired",
        )


class PasswordIsRequiredException(RequiredFieldException):
    def __init__(self):
        super().__init__("password", "password is required", error_type="PasswordIsRequired")


class InvalidEmailException(InvalidArgumentException):
    def __init__(self, email: str):
        super().__init__(
            code=BusinessCode.INVALID_EMAIL,
            message="email is invalid",
            error_type="InvalidEmail",
            details={"email": email},
            field="email",
        )


class UnknownCityException(InvalidArgumentException):
    def __init__(self, city: str):
        super().__init__(
            code=BusinessCode.UNKNOWN_CITY,
            message="unknown city",
            error_type="UnknownCity",
            details={"city": city},
            field="city",
        )


class UnknownProductCategoryException(InvalidArgumentException):
    def __init__(self, category: str):
        super().__init__(
            code=BusinessCode.UNKNOWN_PRODUCT_CATEGORY,
            message="unknown product category",
            error_type="UnknownProductCategory",
            details={"type": category},
            field="type",
        )


class UnknownRoleNameException(InvalidArgumentException):
    def __init__(self, role: str):
        super().__init__(
            code=BusinessCode.UNKNOWN_ROLE,
            message=f"unknown role: {role}",
            error_type="UnknownRoleName",
            details={"role": role},
            field="role",
        )


# ---------------------------------------------------------------------------
# ConflictingState
# ---------------------------------------------------------------------------
class UserAlreadyExistsException(ConflictingStateException):
    def __init__(self, email: str):
        super().__init__(
            code=BusinessCode.USER_ALREADY_EXISTS,
            message=f"Email {email} already registered",
            error_type="UserAlreadyExists",
            details={"email": email},
            field="email",
        )


class AnotherOpenedReceptionException(ConflictingStateException):
    def __init__(self, pvz_id: Optional[str] = None):
        super().__init__(
            code=BusinessCode.RECEPTION_ALREADY_OPENED,
            message="pvz has another receptions opened",
            error_type="AnotherOpenedReception",
            details={"pvz_id": pvz_id} if pvz_id else None,
        )


class AllReceptionsAreClosedException(ConflictingStateException):
    def __init__(self, pvz_id: Optional[str] = None):
        super().__init__(
            code=BusinessCode.RECEPTION_CLOSED,
            message="all receptions are closed at this pvz",
            error_type="AllReceptionsAreClosed",
            details={"pvz_id": pvz_id} if pvz_id else None,
        )


class ReceptionAlreadyClosedException(ConflictingStateException):
    def __init__(self, reception_id: Optional[str] = None):
        super().__init__(
            code=BusinessCode.RECEPTION_CLOSED,
            message="reception is already closed",
            error_type="ReceptionAlreadyClosed",
            details={"reception_id": reception_id} if reception_id else None,
        )


class ReceptionIsEmptyException(ConflictingStateException):
    def __init__(self, reception_id: Optional[str] = None):
        super().__init__(
            code=BusinessCode.RECEPTION_EMPTY,
            message="no products in reception",
            error_type="ReceptionIsEmpty",
            details={"reception_id": reception_id} if reception_id else None,
        )
