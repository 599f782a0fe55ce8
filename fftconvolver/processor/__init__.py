"""
fftconvolver 处理器模块

主要组件：
- Filter / StereoFilter: 逐样本滤波器接口
- ShorttimeSpectralConvolver: 单声道重叠相加频域卷积器
- StereoConvolver: 双通道独立卷积器
- CrossCoupledStereoConvolver: 2x2交叉耦合立体声卷积器
"""

from .base import Filter, StereoFilter
from .convolver import ShorttimeSpectralConvolver
from .stereo import CrossCoupledStereoConvolver, StereoConvolver

__all__ = [
    "Filter",
    "StereoFilter",
    "ShorttimeSpectralConvolver",
    "StereoConvolver",
    "CrossCoupledStereoConvolver",
]
