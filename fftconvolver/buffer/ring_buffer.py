"""
固定容量滑动窗口缓冲区实现

提供双端可推入、溢出时自动淘汰对端元素的有序容器，
是分块累加器和卷积输出累加缓冲区的基础。

核心特性：
- 固定容量：任何时刻 0 <= 长度 <= 容量
- 对端淘汰：尾部推入淘汰头部元素，头部推入淘汰尾部元素
- 优雅降级：容量为0或为空时，推入为空操作，弹出/查看返回None
- 动态容量：修改容量后从指定端淘汰多余元素

元素类型应为不可变的标量（float、complex、numpy标量等），
填充操作会重复推入同一个值。
"""

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar('T')


class SlidingWindow(Generic[T]):
    """
    固定容量滑动窗口

    使用deque存储元素，从旧到新排列（头部最旧，尾部最新）。
    长度单独记录，所有修改都必须经过本类的方法，以保持长度与内部队列同步。
    """

    def __init__(self, capacity: int):
        """
        初始化滑动窗口

        Args:
            capacity: 最大元素个数

        Raises:
            ValueError: 当容量为负数时
        """
        self._validate_capacity(capacity)
        self._inner: deque[T] = deque()
        self._capacity = capacity
        self._length = 0

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> 'SlidingWindow[T]':
        """
        从已有元素创建滑动窗口，容量等于元素个数

        Args:
            items: 从旧到新排列的元素

        Returns:
            SlidingWindow: 已满的滑动窗口
        """
        inner = deque(items)
        window = cls(len(inner))
        window._inner = inner
        window._length = len(inner)
        return window

    # === 状态查询 ===

    @property
    def capacity(self) -> int:
        """获取容量"""
        return self._capacity

    def __len__(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        """检查窗口是否为空"""
        return self._length == 0

    def is_full(self) -> bool:
        """检查窗口是否已满"""
        return self._length >= self._capacity

    def __iter__(self) -> Iterator[T]:
        return iter(self._inner)

    def to_list(self) -> list[T]:
        """按从旧到新的顺序返回元素副本"""
        return list(self._inner)

    # === 推入操作 ===

    def push_back(self, item: T) -> None:
        """
        在尾部推入元素

        容量为0时为空操作；窗口已满时先淘汰头部最旧的元素。
        """
        if self._capacity == 0:
            return

        self.to_capacity_front()
        if self._length == self._capacity:
            self.pop_front()

        self._inner.append(item)
        self._length += 1

    def push_front(self, item: T) -> None:
        """
        在头部推入元素

        容量为0时为空操作；窗口已满时先淘汰尾部的元素。
        """
        if self._capacity == 0:
            return

        self.to_capacity_back()
        if self._length == self._capacity:
            self.pop_back()

        self._inner.appendleft(item)
        self._length += 1

    def extend_back(self, items: Iterable[T]) -> None:
        """依次在尾部推入多个元素"""
        for item in items:
            self.push_back(item)

    # === 弹出操作 ===

    def pop_front(self) -> T | None:
        """
        弹出头部（最旧）元素

        Returns:
            头部元素，窗口为空或容量为0时返回None
        """
        if self._capacity == 0 or not self._inner:
            return None
        self._length -= 1
        return self._inner.popleft()

    def pop_back(self) -> T | None:
        """
        弹出尾部（最新）元素

        Returns:
            尾部元素，窗口为空或容量为0时返回None
        """
        if self._capacity == 0 or not self._inner:
            return None
        self._length -= 1
        return self._inner.pop()

    # === 查看操作 ===

    def front(self) -> T | None:
        """查看头部元素"""
        if self._capacity == 0 or not self._inner:
            return None
        return self._inner[0]

    def back(self) -> T | None:
        """查看尾部元素"""
        if self._capacity == 0 or not self._inner:
            return None
        return self._inner[-1]

    def front_n(self, n: int) -> T | None:
        """
        查看距头部偏移n的元素

        Args:
            n: 偏移量，0表示头部元素

        Returns:
            对应元素，偏移超出当前长度时返回None
        """
        if self._capacity == 0 or n < 0 or n >= len(self._inner):
            return None
        return self._inner[n]

    def back_n(self, n: int) -> T | None:
        """
        查看距尾部偏移n的元素

        Args:
            n: 偏移量，0表示尾部元素

        Returns:
            对应元素，偏移超出当前长度时返回None
        """
        if self._capacity == 0 or n < 0 or n >= len(self._inner):
            return None
        return self._inner[len(self._inner) - n - 1]

    # === 批量操作 ===

    def drain(self, start: int = 0, stop: int | None = None) -> list[T]:
        """
        移除并返回一段连续元素

        Args:
            start: 起始位置（含）
            stop: 结束位置（不含），None表示到尾部

        Returns:
            list: 被移除的元素，保持原有顺序
        """
        items = list(self._inner)
        drained = items[start:stop]
        del items[start:stop]
        self._inner = deque(items)
        self._length -= len(drained)
        return drained

    def clear(self) -> None:
        """移除所有元素"""
        self._inner.clear()
        self._length = 0

    def empty(self) -> list[T]:
        """
        移除并返回所有元素

        Returns:
            list: 从旧到新排列的全部元素
        """
        items = list(self._inner)
        self.clear()
        return items

    def fill_front(self, item: T) -> None:
        """在头部重复推入item直到窗口填满"""
        while self._length < self._capacity:
            self.push_front(item)

    def fill_back(self, item: T) -> None:
        """在尾部重复推入item直到窗口填满"""
        while self._length < self._capacity:
            self.push_back(item)

    # === 容量管理 ===

    def to_capacity_front(self, capacity: int | None = None) -> None:
        """
        （可选地）修改容量，然后从头部淘汰元素直到长度不超过容量

        Args:
            capacity: 新容量，None表示保持当前容量
        """
        if capacity is not None:
            self._validate_capacity(capacity)
            self._capacity = capacity
        while self._length > self._capacity:
            self._inner.popleft()
            self._length -= 1

    def to_capacity_back(self, capacity: int | None = None) -> None:
        """
        （可选地）修改容量，然后从尾部淘汰元素直到长度不超过容量

        Args:
            capacity: 新容量，None表示保持当前容量
        """
        if capacity is not None:
            self._validate_capacity(capacity)
            self._capacity = capacity
        while self._length > self._capacity:
            self._inner.pop()
            self._length -= 1

    def initialize_again(self, value: T) -> None:
        """
        在尾部推入capacity个value

        已有内容会被全部淘汰，窗口变为由value填满的状态。
        """
        for _ in range(self._capacity):
            self.push_back(value)

    def initialize(self, value: T) -> 'SlidingWindow[T]':
        """
        用value填满窗口并返回自身，便于在构造时链式调用

        Example:
            >>> silence = SlidingWindow(8).initialize(0.0)
        """
        self.initialize_again(value)
        return self

    # === 辅助方法 ===

    @staticmethod
    def _validate_capacity(capacity: int) -> None:
        """验证容量参数"""
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError("容量必须是整数类型")
        if capacity < 0:
            raise ValueError("容量不能为负数")

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"capacity={self._capacity}, "
                f"length={self._length}, "
                f"items={list(self._inner)!r})")


# === 便利类型别名 ===
RingBuffer = SlidingWindow


__all__ = [
    "SlidingWindow",
    "RingBuffer",
]
