"""
fftconvolver 缓冲模块

本模块负责逐样本数据的暂存与分块。

主要组件：
- SlidingWindow: 固定容量、对端淘汰的滑动窗口（别名RingBuffer）
- BlockAccumulator: 把逐样本输入攒成固定大小块的累加器
"""

from .block_accumulator import BlockAccumulator
from .ring_buffer import RingBuffer, SlidingWindow

__all__ = [
    "SlidingWindow",
    "RingBuffer",
    "BlockAccumulator",
]
