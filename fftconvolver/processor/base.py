"""
滤波器抽象基类模块

定义单声道与立体声逐样本滤波器的统一接口。
子类只需实现compute与clear，数组批处理由基类提供。
"""

from abc import ABC, abstractmethod

import numpy as np


class Filter(ABC):
    """
    单声道逐样本滤波器

    每次compute输入一个样本并输出一个样本。
    """

    @abstractmethod
    def compute(self, sample: float) -> float:
        """
        处理一个输入样本

        Args:
            sample: 输入样本

        Returns:
            float: 输出样本
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """清除内部状态，不改变滤波器参数"""
        pass

    def process(self, samples: np.ndarray) -> np.ndarray:
        """
        依次处理一段样本

        Args:
            samples: 一维样本数组（或可转换为数组的序列）

        Returns:
            np.ndarray: 与输入等长的float64输出
        """
        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError("数据必须是一维数组")

        return np.fromiter(
            (self.compute(float(sample)) for sample in samples),
            dtype=np.float64,
            count=samples.shape[0]
        )


class StereoFilter(ABC):
    """
    立体声逐样本滤波器

    每次compute输入一对(左, 右)样本并输出一对样本。
    """

    @abstractmethod
    def compute(self, signal: tuple[float, float]) -> tuple[float, float]:
        """
        处理一对输入样本

        Args:
            signal: (左声道样本, 右声道样本)

        Returns:
            tuple: (左声道输出, 右声道输出)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """清除所有通道的内部状态"""
        pass

    def process(self, left: np.ndarray,
                right: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        依次处理一段立体声样本

        Args:
            left: 左声道一维数组
            right: 右声道一维数组，长度必须与左声道相同

        Returns:
            tuple: (左声道输出, 右声道输出)
        """
        left = np.asarray(left, dtype=np.float64)
        right = np.asarray(right, dtype=np.float64)
        if left.ndim != 1 or right.ndim != 1:
            raise ValueError("数据必须是一维数组")
        if left.shape != right.shape:
            raise ValueError(f"左右声道长度不一致: {left.shape[0]} != {right.shape[0]}")

        out_left = np.empty_like(left)
        out_right = np.empty_like(right)
        for i in range(left.shape[0]):
            out_left[i], out_right[i] = self.compute((float(left[i]), float(right[i])))
        return out_left, out_right


__all__ = [
    "Filter",
    "StereoFilter",
]
