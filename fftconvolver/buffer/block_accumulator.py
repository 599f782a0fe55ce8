"""
分块累加器

把逐样本到达的输入攒成固定大小的块，是逐样本流式输入与
按块进行频谱处理之间的桥梁。

行为约定：
- 每推入block_size个元素恰好产出一个完整块
- 永远不会产出不完整的块
- 产出后内部窗口立即清空，开始累积下一个块
"""

import logging
from typing import Generic, TypeVar

from .ring_buffer import SlidingWindow

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BlockAccumulator(Generic[T]):
    """
    基于SlidingWindow的固定大小分块累加器

    内部窗口仅用作暂存区，除此之外无其他状态。
    """

    def __init__(self, block_size: int):
        """
        初始化分块累加器

        Args:
            block_size: 每个块的元素个数，为0时每次推入都产出空块
        """
        self._window: SlidingWindow[T] = SlidingWindow(block_size)

        logger.debug(f"BlockAccumulator初始化: block_size={block_size}")

    def buffer_back(self, item: T) -> list[T] | None:
        """
        在尾部推入元素，凑满一个块时返回该块

        Args:
            item: 新元素

        Returns:
            完整块（从旧到新排列），未凑满时返回None
        """
        self._window.push_back(item)
        return self._take_full_block()

    def buffer_front(self, item: T) -> list[T] | None:
        """
        在头部推入元素，凑满一个块时返回该块

        Args:
            item: 新元素

        Returns:
            完整块（按窗口内顺序排列），未凑满时返回None
        """
        self._window.push_front(item)
        return self._take_full_block()

    def _take_full_block(self) -> list[T] | None:
        """窗口已满时取出全部内容并清空"""
        if len(self._window) != self._window.capacity:
            return None
        return self._window.empty()

    def clear(self) -> None:
        """丢弃未凑满的元素"""
        self._window.clear()

    @property
    def block_size(self) -> int:
        """块大小（元素个数）"""
        return self._window.capacity

    capacity = block_size

    @property
    def window(self) -> SlidingWindow[T]:
        """内部暂存窗口（只应用于查看）"""
        return self._window

    def __len__(self) -> int:
        return len(self._window)

    def __str__(self) -> str:
        return (f"BlockAccumulator(block_size={self.block_size}, "
                f"pending={len(self._window)})")


__all__ = ["BlockAccumulator"]
