"""
内部工具模块

提供fftconvolver项目内部使用的通用工具函数。
"""

from .utils import (
    next_power_of_two,
    setup_logging,
)

__all__ = [
    # 块大小计算
    "next_power_of_two",

    # 日志配置
    "setup_logging",
]
