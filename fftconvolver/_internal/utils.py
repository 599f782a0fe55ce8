"""
内部工具函数模块

提供fftconvolver项目内部使用的通用工具函数，包括：
- 块大小计算工具
- 日志配置工具
"""

import logging

from ..types import LogLevel

# ===== 块大小计算 =====

def next_power_of_two(n: int) -> int:
    """
    计算不小于n的最小2的幂

    与常见整数库的约定一致：n <= 1 时返回1。

    Args:
        n: 目标长度

    Returns:
        int: 不小于n的最小2的幂

    Raises:
        TypeError: 如果n不是整数
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError("长度必须是整数类型")

    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()

# ===== 调试辅助工具 =====

def setup_logging(
    level: str = "INFO",
    format_string: str | None = None,
    include_thread_info: bool = False
) -> logging.Logger:
    """
    设置日志配置

    Args:
        level: 日志级别
        format_string: 自定义格式字符串
        include_thread_info: 是否包含线程信息

    Returns:
        配置好的logger实例

    Raises:
        ValueError: 当日志级别无效时
    """
    valid_levels = [log_level.value for log_level in LogLevel]
    if level.lower() not in valid_levels:
        raise ValueError(f"日志级别必须是以下之一: {valid_levels}")

    if format_string is None:
        if include_thread_info:
            format_string = "%(asctime)s [%(levelname)s] [%(thread)d] %(name)s: %(message)s"
        else:
            format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    return logging.getLogger("fftconvolver")

# ===== 导出列表 =====

__all__ = [
    # 块大小计算
    "next_power_of_two",

    # 调试辅助
    "setup_logging",
]
