"""
错误处理类型系统

定义fftconvolver项目中所有的错误类型、错误码和异常处理相关的类型。
"""

import traceback
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# === 错误处理类型 ===

class ErrorCode(str, Enum):
    """错误码定义"""
    # 通用错误
    UNKNOWN_ERROR = "E0000"

    # 脉冲响应错误
    EMPTY_IMPULSE_RESPONSE = "E1001"
    INVALID_IMPULSE_RESPONSE = "E1002"

    # 频谱变换错误
    TRANSFORM_SIZE_MISMATCH = "E3002"

    # 线程相关错误
    PLANNER_POISONED = "E4003"

class ErrorSeverity(str, Enum):
    """错误严重程度"""
    LOW = "low"           # 低：不影响功能
    MEDIUM = "medium"     # 中：影响性能
    HIGH = "high"         # 高：影响功能
    CRITICAL = "critical" # 严重：系统不可用

class ConvolverError(Exception):
    """卷积器错误基类"""
    def __init__(self,
                 message: str,
                 error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.context = context or {}
        self.timestamp = datetime.now(UTC)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "message": self.message,
            "error_code": self.error_code.value,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

class ImpulseResponseError(ConvolverError):
    """脉冲响应无效错误"""
    def __init__(self, message: str,
                 error_code: ErrorCode = ErrorCode.INVALID_IMPULSE_RESPONSE,
                 ir_info: dict[str, Any] | None = None):
        super().__init__(
            message,
            error_code,
            ErrorSeverity.HIGH,
            {"ir_info": ir_info}
        )

class SpectralTransformError(ConvolverError):
    """频谱变换错误"""
    pass

class PlannerPoisonedError(SpectralTransformError):
    """变换规划器已损坏错误

    持有锁期间发生过异常，缓存状态未知，不可继续使用。
    """
    def __init__(self, reason: str):
        super().__init__(
            f"变换规划器已损坏: {reason}",
            ErrorCode.PLANNER_POISONED,
            ErrorSeverity.CRITICAL,
            {"reason": reason}
        )

class ErrorInfo(BaseModel):
    """错误信息"""
    error_code: ErrorCode = Field(description="错误码")
    message: str = Field(description="错误消息")
    severity: ErrorSeverity = Field(description="严重程度")
    timestamp: datetime = Field(description="发生时间")
    context: dict[str, Any] = Field(default={}, description="错误上下文")
    stack_trace: str | None = Field(default=None, description="堆栈跟踪")
    recovery_suggestions: list[str] = Field(default=[], description="恢复建议")

    @classmethod
    def from_exception(cls, exc: Exception) -> 'ErrorInfo':
        """从异常创建错误信息，异常已被抛出过时附带堆栈跟踪"""
        stack_trace = None
        if exc.__traceback__ is not None:
            stack_trace = "".join(traceback.format_exception(exc))

        if isinstance(exc, ConvolverError):
            suggestions = []
            if isinstance(exc, PlannerPoisonedError):
                suggestions.append("重新创建SpectralPlanner及依赖它的卷积器")
            return cls(
                error_code=exc.error_code,
                message=exc.message,
                severity=exc.severity,
                timestamp=exc.timestamp,
                context=exc.context,
                stack_trace=stack_trace,
                recovery_suggestions=suggestions
            )
        else:
            return cls(
                error_code=ErrorCode.UNKNOWN_ERROR,
                message=str(exc),
                severity=ErrorSeverity.MEDIUM,
                timestamp=datetime.now(UTC),
                context={"exception_type": type(exc).__name__},
                stack_trace=stack_trace
            )


__all__ = [
    "ErrorCode", "ErrorSeverity", "ConvolverError", "ImpulseResponseError",
    "SpectralTransformError", "PlannerPoisonedError", "ErrorInfo"
]
