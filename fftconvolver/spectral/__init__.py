"""
fftconvolver 频谱变换模块

主要组件：
- SpectralPlan: 固定长度的正/逆变换计划
- SpectralPlanner: 线程安全的计划缓存，可在多个卷积器之间共享
"""

from .planner import SpectralPlan, SpectralPlanner

__all__ = [
    "SpectralPlan",
    "SpectralPlanner",
]
