"""
fftconvolver核心类型系统

提供整个项目的数据契约基础，包括：
- 卷积器配置类型
- 运行统计类型
- 错误处理类型

设计原则：
- 零依赖（除pydantic外）
- 类型安全优先
- 完整的验证规则
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

# === 基础枚举类型 ===

class LogLevel(str, Enum):
    """日志级别"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

class TransformDirection(str, Enum):
    """频谱变换方向"""
    FORWARD = "forward"     # 正变换
    INVERSE = "inverse"     # 逆变换（未归一化）

# === 配置类型 ===

# 单个块的最大样本数
MAX_WINDOW_SIZE = 1 << 20

class ConvolverConfig(BaseModel):
    """
    卷积器配置

    窗口大小决定每次频谱变换处理的样本数，同时也是卷积器的固定延迟。
    """
    window_size: int = Field(
        default=512,
        description="输入块大小（样本数），同时也是输出延迟",
        ge=1,
        le=MAX_WINDOW_SIZE
    )
    share_planner: bool = Field(
        default=True,
        description="立体声卷积器的各通道引擎是否共享同一个变换规划器"
    )

    @field_validator('window_size', mode='before')
    @classmethod
    def validate_window_size(cls, v):
        """验证窗口大小"""
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError('窗口大小必须是整数')
        return v

    class Config:
        extra = "forbid"
        frozen = True  # 配置不可变
        json_schema_extra = {
            "examples": [
                {
                    "window_size": 256,
                    "share_planner": True
                }
            ]
        }

def create_default_config(**kwargs) -> ConvolverConfig:
    """
    创建默认配置

    Args:
        **kwargs: 覆盖默认值的配置参数

    Returns:
        ConvolverConfig: 配置实例
    """
    return ConvolverConfig(**kwargs)

# === 统计类型 ===

class ConvolverStats(BaseModel):
    """
    单通道卷积器统计信息
    """
    window_size: int = Field(description="输入块大小（样本数）", ge=1)
    padded_window_size: int = Field(description="补零后的变换长度（样本数）", ge=1)
    latency_samples: int = Field(description="固定输出延迟（样本数）", ge=0)
    ir_length: int = Field(description="脉冲响应长度（样本数）", ge=1)
    samples_processed: int = Field(default=0, description="已处理样本数", ge=0)
    blocks_processed: int = Field(default=0, description="已处理块数", ge=0)

    def summary(self) -> str:
        """返回统计摘要"""
        return (f"处理了{self.samples_processed}个样本/{self.blocks_processed}个块, "
                f"窗口={self.window_size}, 变换长度={self.padded_window_size}, "
                f"延迟={self.latency_samples}样本")

class PlannerStats(BaseModel):
    """
    变换规划器统计信息
    """
    cached_plans: int = Field(description="已缓存的变换计划数", ge=0)
    cache_hits: int = Field(default=0, description="缓存命中次数", ge=0)
    cache_misses: int = Field(default=0, description="缓存未命中次数", ge=0)
    transforms_executed: int = Field(default=0, description="已执行的变换次数", ge=0)
    poisoned: bool = Field(default=False, description="规划器是否已损坏")

    @property
    def hit_rate(self) -> float:
        """缓存命中率（0.0-1.0）"""
        total = self.cache_hits + self.cache_misses
        if total == 0:
            return 0.0
        return self.cache_hits / total

    def summary(self) -> str:
        """返回统计摘要"""
        return (f"缓存计划{self.cached_plans}个, "
                f"命中率{self.hit_rate:.1%}, "
                f"执行变换{self.transforms_executed}次")

# 从子模块导入额外类型
from .errors import (
    ConvolverError,
    ErrorCode,
    ErrorInfo,
    ErrorSeverity,
    ImpulseResponseError,
    PlannerPoisonedError,
    SpectralTransformError,
)

# === 导出的类型定义 ===

__all__ = [
    # 枚举类型
    "LogLevel", "TransformDirection",

    # 配置类型
    "ConvolverConfig", "create_default_config", "MAX_WINDOW_SIZE",

    # 统计类型
    "ConvolverStats", "PlannerStats",

    # 错误处理类型
    "ErrorCode", "ErrorSeverity", "ConvolverError", "ImpulseResponseError",
    "SpectralTransformError", "PlannerPoisonedError", "ErrorInfo",
]
