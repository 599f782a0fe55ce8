"""
频谱变换规划器

提供按变换长度缓存的正/逆变换计划，以及线程安全的执行入口。
规划器作为能力在构造时注入卷积器，多个卷积器（例如交叉耦合立体声
卷积器内部的四个引擎，或不同线程中的独立实例）可以共享同一个规划器。

线程安全：
- 单个互斥锁保护计划缓存与统计
- 锁只在一次正变换或逆变换期间持有
- 持锁期间发生异常时规划器被标记为已损坏，之后的所有获取都会抛出
  PlannerPoisonedError，缓存状态未知时不允许继续使用
"""

import logging
import operator
import threading
from contextlib import contextmanager

import numpy as np

from ..types import PlannerStats, TransformDirection
from ..types.errors import (
    ErrorCode,
    ErrorSeverity,
    PlannerPoisonedError,
    SpectralTransformError,
)

logger = logging.getLogger(__name__)


class SpectralPlan:
    """
    固定长度的复数离散傅里叶变换计划

    正变换不做缩放；逆变换同样不做缩放，调用方负责除以变换长度。
    """

    def __init__(self, size: int, direction: TransformDirection):
        if size <= 0:
            raise ValueError("变换长度必须大于0")
        self._size = size
        self._direction = direction

    @property
    def size(self) -> int:
        """变换长度"""
        return self._size

    @property
    def direction(self) -> TransformDirection:
        """变换方向"""
        return self._direction

    def process(self, buffer: np.ndarray) -> np.ndarray:
        """
        执行变换

        Args:
            buffer: 长度等于size的一维数组

        Returns:
            np.ndarray: complex128变换结果（新数组）

        Raises:
            SpectralTransformError: 当输入长度与计划不符时
        """
        if buffer.ndim != 1 or buffer.shape[0] != self._size:
            raise SpectralTransformError(
                f"变换长度不匹配: 期望{self._size}, 实际{buffer.shape}",
                ErrorCode.TRANSFORM_SIZE_MISMATCH,
                ErrorSeverity.HIGH,
                {"expected": self._size, "actual": list(buffer.shape)}
            )

        if self._direction == TransformDirection.FORWARD:
            return np.fft.fft(buffer)
        # norm="forward"把缩放放到正变换一侧，逆变换保持未归一化
        return np.fft.ifft(buffer, norm="forward")

    def __repr__(self) -> str:
        return f"SpectralPlan(size={self._size}, direction={self._direction.value})"


class SpectralPlanner:
    """
    线程安全的变换计划缓存

    以(方向, 长度)为键缓存SpectralPlan，避免每次调用都重新创建计划。
    """

    def __init__(self):
        self._plans: dict[tuple[TransformDirection, int], SpectralPlan] = {}
        self._lock = threading.Lock()
        self._poisoned_reason: str | None = None

        # 统计
        self._cache_hits = 0
        self._cache_misses = 0
        self._transforms_executed = 0

    # === 计划获取 ===

    def plan_forward(self, size: int) -> SpectralPlan:
        """获取或创建长度为size的正变换计划"""
        with self._guard("plan_forward"):
            return self._get_or_create(TransformDirection.FORWARD, size)

    def plan_inverse(self, size: int) -> SpectralPlan:
        """获取或创建长度为size的逆变换计划"""
        with self._guard("plan_inverse"):
            return self._get_or_create(TransformDirection.INVERSE, size)

    # === 变换执行 ===

    def forward(self, buffer: np.ndarray) -> np.ndarray:
        """
        对buffer执行正变换

        Args:
            buffer: 一维数组，长度决定使用的计划

        Returns:
            np.ndarray: 频谱（complex128）
        """
        return self._execute(TransformDirection.FORWARD, buffer)

    def inverse(self, buffer: np.ndarray) -> np.ndarray:
        """
        对buffer执行未归一化的逆变换

        Args:
            buffer: 一维频谱数组

        Returns:
            np.ndarray: 时域结果（complex128），尚未除以变换长度
        """
        return self._execute(TransformDirection.INVERSE, buffer)

    def _execute(self, direction: TransformDirection, buffer: np.ndarray) -> np.ndarray:
        buffer = np.asarray(buffer)
        if buffer.ndim != 1:
            raise ValueError("变换输入必须是一维数组")
        size = buffer.shape[0]
        if size == 0:
            raise ValueError("变换长度必须大于0")

        with self._guard(f"{direction.value}变换"):
            plan = self._get_or_create(direction, size)
            result = plan.process(buffer)
            self._transforms_executed += 1
            return result

    def _get_or_create(self, direction: TransformDirection, size: int) -> SpectralPlan:
        """获取或创建计划，调用方必须已持有锁"""
        if isinstance(size, bool):
            raise ValueError("变换长度必须是正整数")
        try:
            size = operator.index(size)
        except TypeError as e:
            raise ValueError("变换长度必须是正整数") from e
        if size <= 0:
            raise ValueError("变换长度必须是正整数")

        key = (direction, size)
        plan = self._plans.get(key)
        if plan is not None:
            self._cache_hits += 1
            return plan

        self._cache_misses += 1
        plan = SpectralPlan(size, direction)
        self._plans[key] = plan
        logger.debug(f"创建变换计划: {plan}")
        return plan

    # === 锁管理 ===

    @contextmanager
    def _guard(self, operation_name: str):
        """
        持锁执行操作

        持锁期间抛出的异常会使规划器进入损坏状态并继续向上传播。
        """
        with self._lock:
            if self._poisoned_reason is not None:
                raise PlannerPoisonedError(self._poisoned_reason)
            try:
                yield
            except ValueError:
                # 参数错误发生在修改缓存之前，不影响缓存状态
                raise
            except BaseException as e:
                self._poisoned_reason = f"{operation_name}失败: {e!r}"
                logger.warning(f"变换规划器已损坏: {self._poisoned_reason}")
                raise

    @property
    def is_poisoned(self) -> bool:
        """检查规划器是否已损坏"""
        return self._poisoned_reason is not None

    # === 状态查询 ===

    def cached_sizes(self, direction: TransformDirection | None = None) -> list[int]:
        """
        返回已缓存计划的变换长度

        Args:
            direction: 仅返回指定方向的计划，None表示全部
        """
        with self._lock:
            sizes = {size for (d, size) in self._plans
                     if direction is None or d == direction}
        return sorted(sizes)

    def get_stats(self) -> PlannerStats:
        """获取规划器统计信息"""
        with self._lock:
            return PlannerStats(
                cached_plans=len(self._plans),
                cache_hits=self._cache_hits,
                cache_misses=self._cache_misses,
                transforms_executed=self._transforms_executed,
                poisoned=self._poisoned_reason is not None
            )

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"plans={len(self._plans)}, "
                f"poisoned={self.is_poisoned})")


__all__ = [
    "SpectralPlan",
    "SpectralPlanner",
]
