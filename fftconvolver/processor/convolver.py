"""
短时频谱卷积器

使用重叠相加（overlap-add）法，对单个声道与固定脉冲响应做流式线性卷积。

处理流程：
1. 逐样本输入经BlockAccumulator攒成window_size大小的块
2. 块补零到padded_window_size后做正变换
3. 与缓存的脉冲响应频谱逐点相乘
4. 逆变换，取实部并除以padded_window_size
5. 结果累加到输出滑动窗口中（与之前块的尾部重叠相加）

每次compute从输出窗口头部取出一个样本，因此输出相对输入固定延迟
window_size个样本：第n次调用的输出为 (x * ir)[n - window_size]。
"""

import logging
from collections.abc import Sequence

import numpy as np

from .._internal.utils import next_power_of_two
from ..buffer import BlockAccumulator, SlidingWindow
from ..spectral import SpectralPlanner
from ..types import ConvolverConfig, ConvolverStats
from ..types.errors import ErrorCode, ImpulseResponseError
from .base import Filter

logger = logging.getLogger(__name__)


class ShorttimeSpectralConvolver(Filter):
    """
    单声道短时频谱卷积器

    脉冲响应频谱只在构造时计算一次，之后每个块都复用它。
    同一实例只能由单一生产者按顺序调用compute。
    """

    def __init__(self, impulse_response: Sequence[float] | np.ndarray,
                 window_size: int,
                 planner: SpectralPlanner | None = None):
        """
        初始化卷积器

        Args:
            impulse_response: 脉冲响应（非空的一维有限实数序列）
            window_size: 输入块大小（样本数），必须大于0
            planner: 变换规划器，None时创建私有规划器

        Raises:
            ValueError: 当window_size无效时
            ImpulseResponseError: 当脉冲响应无效时
        """
        self._validate_window_size(window_size)
        self._ir = self._validate_impulse_response(impulse_response)
        self._window_size = window_size
        self._padded_window_size = self.padded_size_for(len(self._ir), window_size)
        self._planner = planner if planner is not None else SpectralPlanner()

        # 补零后的脉冲响应频谱，只计算一次
        padded_ir = np.zeros(self._padded_window_size, dtype=np.complex128)
        padded_ir[:len(self._ir)] = self._ir
        self._ir_spectrum = self._planner.forward(padded_ir)

        self._input: BlockAccumulator[float] = BlockAccumulator(window_size)
        self._output: SlidingWindow[float] = SlidingWindow(self._padded_window_size).initialize(0.0)

        self._samples_processed = 0
        self._blocks_processed = 0

        logger.debug(f"ShorttimeSpectralConvolver初始化: ir_length={len(self._ir)}, "
                     f"window_size={window_size}, padded_window_size={self._padded_window_size}")

    @classmethod
    def from_config(cls, impulse_response: Sequence[float] | np.ndarray,
                    config: ConvolverConfig,
                    planner: SpectralPlanner | None = None) -> 'ShorttimeSpectralConvolver':
        """根据配置创建卷积器"""
        return cls(impulse_response, config.window_size, planner)

    @staticmethod
    def padded_size_for(ir_length: int, window_size: int) -> int:
        """
        计算补零后的变换长度

        取不小于 ir_length + window_size - 1 的最小2的幂，
        保证循环卷积等于线性卷积。
        """
        return next_power_of_two(ir_length + window_size - 1)

    # === 流式处理 ===

    def compute(self, sample: float) -> float:
        """
        输入一个样本，输出一个延迟window_size个样本的卷积结果

        Args:
            sample: 输入样本

        Returns:
            float: 输出样本
        """
        buffered_signal = self._output.pop_front()
        self._output.push_back(0.0)

        chunk = self._input.buffer_back(float(sample))
        if chunk is not None:
            self._overlap_add(chunk)

        self._samples_processed += 1
        return buffered_signal

    def _overlap_add(self, chunk: list[float]) -> None:
        """对一个完整块做频域卷积并累加到输出窗口"""
        padded_window_size = self._padded_window_size

        buffer = np.zeros(padded_window_size, dtype=np.complex128)
        buffer[:len(chunk)] = chunk

        spectrum = self._planner.forward(buffer)
        spectrum *= self._ir_spectrum
        result = self._planner.inverse(spectrum)

        contribution = result.real / padded_window_size
        pending = np.asarray(self._output.empty(), dtype=np.float64)
        self._output.extend_back((pending + contribution).tolist())

        self._blocks_processed += 1

    def clear(self) -> None:
        """丢弃未完成的输入块和所有待输出的重叠相加结果"""
        self._input.clear()
        self._output.initialize_again(0.0)
        logger.debug("ShorttimeSpectralConvolver已清空")

    # === 状态查询 ===

    @property
    def window_size(self) -> int:
        """输入块大小（样本数）"""
        return self._window_size

    @property
    def padded_window_size(self) -> int:
        """补零后的变换长度（样本数）"""
        return self._padded_window_size

    @property
    def internal_buffer_size(self) -> int:
        """输出累加窗口的长度，恒等于padded_window_size"""
        return len(self._output)

    @property
    def latency_samples(self) -> int:
        """输入到输出的固定延迟（样本数）"""
        return self._window_size

    @property
    def impulse_response(self) -> np.ndarray:
        """脉冲响应副本"""
        return self._ir.copy()

    @property
    def output_buffer(self) -> SlidingWindow[float]:
        """输出累加窗口（只应用于查看）"""
        return self._output

    @property
    def planner(self) -> SpectralPlanner:
        """使用的变换规划器"""
        return self._planner

    def get_stats(self) -> ConvolverStats:
        """获取统计信息"""
        return ConvolverStats(
            window_size=self._window_size,
            padded_window_size=self._padded_window_size,
            latency_samples=self.latency_samples,
            ir_length=len(self._ir),
            samples_processed=self._samples_processed,
            blocks_processed=self._blocks_processed
        )

    # === 辅助方法 ===

    @staticmethod
    def _validate_window_size(window_size: int) -> None:
        """验证窗口大小"""
        if not isinstance(window_size, int) or isinstance(window_size, bool):
            raise ValueError("窗口大小必须是整数")
        if window_size <= 0:
            raise ValueError("窗口大小必须大于0")

    @staticmethod
    def _validate_impulse_response(impulse_response) -> np.ndarray:
        """
        验证并转换脉冲响应

        Returns:
            np.ndarray: float64一维数组（独立副本）

        Raises:
            ImpulseResponseError: 当脉冲响应为空、不是一维、为复数或包含非有限值时
        """
        try:
            raw = np.asarray(impulse_response)
            if np.iscomplexobj(raw):
                raise ImpulseResponseError(
                    "脉冲响应必须是实数序列",
                    ErrorCode.INVALID_IMPULSE_RESPONSE,
                    ir_info={"dtype": str(raw.dtype)}
                )
            ir = np.array(raw, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ImpulseResponseError(f"脉冲响应无法转换为实数数组: {e}") from e

        if ir.ndim != 1:
            raise ImpulseResponseError(
                "脉冲响应必须是一维数组",
                ir_info={"shape": list(ir.shape)}
            )
        if ir.size == 0:
            raise ImpulseResponseError(
                "脉冲响应不能为空",
                ErrorCode.EMPTY_IMPULSE_RESPONSE
            )
        if not np.all(np.isfinite(ir)):
            raise ImpulseResponseError(
                "脉冲响应包含非有限值",
                ir_info={"length": int(ir.size)}
            )
        return ir

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"ir_length={len(self._ir)}, "
                f"window_size={self._window_size}, "
                f"padded_window_size={self._padded_window_size})")


__all__ = ["ShorttimeSpectralConvolver"]
