"""
fftconvolver: 流式频域卷积库

fftconvolver用分块频域乘法代替直接时域卷积，把任意有限长脉冲响应实时地
施加到连续样本流上。每个样本的平均开销从O(脉冲响应长度)降到
O(log(变换长度))，适用于卷积混响、声道间染色等脉冲响应长达数千样本的场景。

核心特性:
- 重叠相加: 分块正变换、与缓存的脉冲响应频谱相乘、逆变换后叠加
- 逐样本接口: 每次compute输入一个样本、输出一个样本，固定延迟window_size
- 立体声: 独立双通道与2x2交叉耦合两种组合方式
- 共享规划器: 线程安全的变换计划缓存，可在多个卷积器之间共享

快速开始:
    >>> import fftconvolver
    >>> convolver = fftconvolver.create_convolver([1.0, 0.5, 0.25], window_size=64)
    >>> out = convolver.compute(1.0)

    >>> stereo = fftconvolver.create_stereo_convolver(ir_left, ir_right, window_size=256)
    >>> left_out, right_out = stereo.compute((0.1, -0.1))
"""

# 版本信息
__version__ = "0.1.0"
__license__ = "MIT"

import logging
import os
import sys
from collections.abc import Sequence

import numpy as np

logger = logging.getLogger(__name__)

from ._internal import next_power_of_two, setup_logging
from .buffer import BlockAccumulator, RingBuffer, SlidingWindow
from .processor import (
    CrossCoupledStereoConvolver,
    Filter,
    ShorttimeSpectralConvolver,
    StereoConvolver,
    StereoFilter,
)
from .spectral import SpectralPlan, SpectralPlanner
from .types import (
    # 配置类型
    ConvolverConfig,
    # 异常类型
    ConvolverError,
    # 统计类型
    ConvolverStats,
    ErrorCode,
    ErrorInfo,
    ErrorSeverity,
    ImpulseResponseError,
    # 枚举类型
    LogLevel,
    PlannerPoisonedError,
    PlannerStats,
    SpectralTransformError,
    TransformDirection,
    create_default_config,
)

# 公开API
__all__ = [
    # 版本信息
    "__version__",

    # 卷积器
    "ShorttimeSpectralConvolver",
    "StereoConvolver",
    "CrossCoupledStereoConvolver",
    "Filter",
    "StereoFilter",

    # 缓冲区
    "SlidingWindow",
    "RingBuffer",
    "BlockAccumulator",

    # 频谱变换
    "SpectralPlan",
    "SpectralPlanner",

    # 配置类型
    "ConvolverConfig",
    "create_default_config",

    # 统计类型
    "ConvolverStats",
    "PlannerStats",

    # 枚举类型
    "LogLevel",
    "TransformDirection",

    # 异常类型
    "ConvolverError",
    "ImpulseResponseError",
    "SpectralTransformError",
    "PlannerPoisonedError",
    "ErrorCode",
    "ErrorSeverity",
    "ErrorInfo",

    # 便捷函数
    "create_convolver",
    "create_stereo_convolver",
    "create_cross_coupled_convolver",
    "next_power_of_two",
    "setup_logging",
    "get_debug_info",
]

ImpulseResponse = Sequence[float] | np.ndarray

# 工厂函数
def create_convolver(impulse_response: ImpulseResponse,
                     planner: SpectralPlanner | None = None,
                     **kwargs) -> ShorttimeSpectralConvolver:
    """
    创建单声道卷积器的工厂函数

    Args:
        impulse_response: 脉冲响应
        planner: 可选的共享变换规划器
        **kwargs: 配置参数，覆盖默认值
            - window_size: int = 512 (块大小，同时也是延迟)

    Returns:
        ShorttimeSpectralConvolver: 配置好的卷积器

    Example:
        convolver = fftconvolver.create_convolver(ir, window_size=128)
    """
    config = create_default_config(**kwargs)
    return ShorttimeSpectralConvolver.from_config(impulse_response, config, planner)

def create_stereo_convolver(ir_left: ImpulseResponse, ir_right: ImpulseResponse,
                            planner: SpectralPlanner | None = None,
                            **kwargs) -> StereoConvolver:
    """
    创建双通道独立卷积器的工厂函数

    Args:
        ir_left: 左声道脉冲响应
        ir_right: 右声道脉冲响应
        planner: 可选的共享变换规划器
        **kwargs: 配置参数
            - window_size: int = 512
            - share_planner: bool = True (两个通道是否共享规划器)

    Returns:
        StereoConvolver: 配置好的立体声卷积器
    """
    config = create_default_config(**kwargs)
    return StereoConvolver.from_config(ir_left, ir_right, config, planner)

def create_cross_coupled_convolver(ir_ll: ImpulseResponse, ir_rr: ImpulseResponse,
                                   ir_lr: ImpulseResponse, ir_rl: ImpulseResponse,
                                   planner: SpectralPlanner | None = None,
                                   **kwargs) -> CrossCoupledStereoConvolver:
    """
    创建2x2交叉耦合立体声卷积器的工厂函数

    Args:
        ir_ll: 左输入到左输出的脉冲响应
        ir_rr: 右输入到右输出的脉冲响应
        ir_lr: 左输入到右输出的脉冲响应
        ir_rl: 右输入到左输出的脉冲响应
        planner: 可选的共享变换规划器
        **kwargs: 配置参数，同create_stereo_convolver

    Returns:
        CrossCoupledStereoConvolver: 配置好的交叉耦合卷积器
    """
    config = create_default_config(**kwargs)
    return CrossCoupledStereoConvolver.from_config(ir_ll, ir_rr, ir_lr, ir_rl, config, planner)

# 调试信息
def get_debug_info() -> dict:
    """获取调试信息"""

    debug_info = {
        "version": __version__,
        "python_version": sys.version,
        "install_path": os.path.dirname(__file__),
        "dependencies": {}
    }

    debug_info["dependencies"]["numpy"] = np.__version__

    import pydantic
    debug_info["dependencies"]["pydantic"] = pydantic.__version__

    return debug_info
