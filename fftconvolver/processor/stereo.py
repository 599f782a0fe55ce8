"""
立体声卷积器

由多个单声道ShorttimeSpectralConvolver组合而成：
- StereoConvolver: 左右声道各自独立卷积，无串扰
- CrossCoupledStereoConvolver: 完整的2x2传递矩阵，
  每个输出声道叠加直达项与来自另一声道的串扰项

各引擎之间除变换规划器外不共享任何可变状态。
"""

import logging
from collections.abc import Sequence

import numpy as np

from ..spectral import SpectralPlanner
from ..types import ConvolverConfig, ConvolverStats
from .base import StereoFilter
from .convolver import ShorttimeSpectralConvolver

logger = logging.getLogger(__name__)

ImpulseResponse = Sequence[float] | np.ndarray


class StereoConvolver(StereoFilter):
    """
    双通道独立卷积器

    compute((l, r)) = (L.compute(l), R.compute(r))
    """

    def __init__(self, ir_left: ImpulseResponse, ir_right: ImpulseResponse,
                 window_size: int, planner: SpectralPlanner | None = None,
                 share_planner: bool = True):
        """
        初始化立体声卷积器

        Args:
            ir_left: 左声道脉冲响应
            ir_right: 右声道脉冲响应
            window_size: 两个通道共用的块大小
            planner: 共享的变换规划器
            share_planner: planner为None时，是否新建一个供两个通道共享；
                为False时每个通道各自创建私有规划器
        """
        if planner is None and share_planner:
            planner = SpectralPlanner()

        self._left = ShorttimeSpectralConvolver(ir_left, window_size, planner)
        self._right = ShorttimeSpectralConvolver(ir_right, window_size, planner)

        logger.debug(f"StereoConvolver初始化: window_size={window_size}")

    @classmethod
    def from_config(cls, ir_left: ImpulseResponse, ir_right: ImpulseResponse,
                    config: ConvolverConfig,
                    planner: SpectralPlanner | None = None) -> 'StereoConvolver':
        """根据配置创建立体声卷积器"""
        return cls(ir_left, ir_right, config.window_size, planner,
                   share_planner=config.share_planner)

    def compute(self, signal: tuple[float, float]) -> tuple[float, float]:
        left, right = signal
        return (self._left.compute(left), self._right.compute(right))

    def clear(self) -> None:
        self._left.clear()
        self._right.clear()

    @property
    def left(self) -> ShorttimeSpectralConvolver:
        """左声道引擎"""
        return self._left

    @property
    def right(self) -> ShorttimeSpectralConvolver:
        """右声道引擎"""
        return self._right

    @property
    def window_size(self) -> int:
        return self._left.window_size

    @property
    def internal_buffer_size(self) -> int:
        return self._left.internal_buffer_size

    @property
    def latency_samples(self) -> int:
        return self._left.latency_samples

    def get_stats(self) -> dict[str, ConvolverStats]:
        """获取各通道统计信息"""
        return {
            "left": self._left.get_stats(),
            "right": self._right.get_stats(),
        }

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"window_size={self.window_size}, "
                f"internal_buffer_size={self.internal_buffer_size})")


class CrossCoupledStereoConvolver(StereoFilter):
    """
    2x2交叉耦合立体声卷积器

    四个引擎分别对应LL（左直达）、RR（右直达）、LR（左入右）、RL（右入左）：

        左输出 = LL(l) + RL(r)
        右输出 = RR(r) + LR(l)

    可用于模拟声学串扰或双耳脉冲响应。
    """

    def __init__(self, ir_ll: ImpulseResponse, ir_rr: ImpulseResponse,
                 ir_lr: ImpulseResponse, ir_rl: ImpulseResponse,
                 window_size: int, planner: SpectralPlanner | None = None,
                 share_planner: bool = True):
        """
        初始化交叉耦合立体声卷积器

        Args:
            ir_ll: 左输入到左输出的脉冲响应
            ir_rr: 右输入到右输出的脉冲响应
            ir_lr: 左输入到右输出的脉冲响应
            ir_rl: 右输入到左输出的脉冲响应
            window_size: 四个引擎共用的块大小
            planner: 共享的变换规划器
            share_planner: planner为None时，是否新建一个供四个引擎共享
        """
        if planner is None and share_planner:
            planner = SpectralPlanner()

        self._ll = ShorttimeSpectralConvolver(ir_ll, window_size, planner)
        self._rr = ShorttimeSpectralConvolver(ir_rr, window_size, planner)
        self._lr = ShorttimeSpectralConvolver(ir_lr, window_size, planner)
        self._rl = ShorttimeSpectralConvolver(ir_rl, window_size, planner)

        logger.debug(f"CrossCoupledStereoConvolver初始化: window_size={window_size}")

    @classmethod
    def from_config(cls, ir_ll: ImpulseResponse, ir_rr: ImpulseResponse,
                    ir_lr: ImpulseResponse, ir_rl: ImpulseResponse,
                    config: ConvolverConfig,
                    planner: SpectralPlanner | None = None) -> 'CrossCoupledStereoConvolver':
        """根据配置创建交叉耦合立体声卷积器"""
        return cls(ir_ll, ir_rr, ir_lr, ir_rl, config.window_size, planner,
                   share_planner=config.share_planner)

    def compute(self, signal: tuple[float, float]) -> tuple[float, float]:
        left, right = signal
        return (self._ll.compute(left) + self._rl.compute(right),
                self._rr.compute(right) + self._lr.compute(left))

    def clear(self) -> None:
        self._ll.clear()
        self._rr.clear()
        self._lr.clear()
        self._rl.clear()

    @property
    def engines(self) -> dict[str, ShorttimeSpectralConvolver]:
        """按传递路径命名的四个引擎"""
        return {"ll": self._ll, "rr": self._rr, "lr": self._lr, "rl": self._rl}

    @property
    def window_size(self) -> int:
        return self._ll.window_size

    @property
    def internal_buffer_size(self) -> int:
        return self._ll.internal_buffer_size

    @property
    def latency_samples(self) -> int:
        return self._ll.latency_samples

    def get_stats(self) -> dict[str, ConvolverStats]:
        """获取四个引擎的统计信息"""
        return {
            "ll": self._ll.get_stats(),
            "rr": self._rr.get_stats(),
            "lr": self._lr.get_stats(),
            "rl": self._rl.get_stats(),
        }

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"window_size={self.window_size}, "
                f"internal_buffer_size={self.internal_buffer_size})")


__all__ = [
    "StereoConvolver",
    "CrossCoupledStereoConvolver",
]
