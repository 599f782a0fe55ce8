"""
短时频谱卷积器单元测试

测试ShorttimeSpectralConvolver的核心性质：
- 固定延迟
- 与时域直接卷积的一致性（短脉冲响应与长脉冲响应）
- 线性
- clear后的状态
- 构造参数校验
"""

import numpy as np
import pytest

from fftconvolver.processor import ShorttimeSpectralConvolver
from fftconvolver.spectral import SpectralPlanner
from fftconvolver.types import ConvolverConfig
from fftconvolver.types.errors import ErrorCode, ImpulseResponseError


def run(convolver, samples):
    """逐样本调用compute"""
    return np.array([convolver.compute(float(s)) for s in samples])


def reference_output(x, ir, window_size):
    """期望输出：时域直接卷积延迟window_size个样本"""
    full = np.convolve(x, ir)
    expected = np.zeros(window_size + len(full))
    expected[window_size:] = full
    return expected


class TestConvolverConstruction:
    """构造与状态查询测试"""

    def test_padded_window_size(self):
        """变换长度为不小于ir_length + window_size - 1的最小2的幂"""
        convolver = ShorttimeSpectralConvolver(np.ones(100), 64)

        assert convolver.window_size == 64
        assert convolver.padded_window_size == 256
        assert convolver.internal_buffer_size == 256
        assert convolver.latency_samples == 64

    def test_exact_power_of_two(self):
        """刚好是2的幂时不再翻倍"""
        convolver = ShorttimeSpectralConvolver([1.0], 8)
        assert convolver.padded_window_size == 8

    def test_output_buffer_initialized_with_silence(self):
        """输出窗口初始为全零且已满"""
        convolver = ShorttimeSpectralConvolver([0.5, 0.5], 4)
        output = convolver.output_buffer

        assert output.is_full()
        assert output.to_list() == [0.0] * convolver.padded_window_size

    def test_impulse_response_is_copied(self):
        """修改传入数组不影响卷积器"""
        ir = np.array([1.0, 2.0])
        convolver = ShorttimeSpectralConvolver(ir, 4)
        ir[0] = 100.0

        np.testing.assert_array_equal(convolver.impulse_response, [1.0, 2.0])

    def test_from_config(self):
        """根据配置创建"""
        config = ConvolverConfig(window_size=32)
        convolver = ShorttimeSpectralConvolver.from_config([1.0, 0.0], config)

        assert convolver.window_size == 32

    @pytest.mark.parametrize("window_size", [0, -4])
    def test_invalid_window_size(self, window_size):
        """测试无效窗口大小"""
        with pytest.raises(ValueError, match="窗口大小必须大于0"):
            ShorttimeSpectralConvolver([1.0], window_size)

    def test_non_integer_window_size(self):
        """测试非整数窗口大小"""
        with pytest.raises(ValueError, match="窗口大小必须是整数"):
            ShorttimeSpectralConvolver([1.0], 4.0)

    def test_empty_impulse_response(self):
        """空脉冲响应在构造时被拒绝"""
        with pytest.raises(ImpulseResponseError) as exc_info:
            ShorttimeSpectralConvolver([], 4)

        assert exc_info.value.error_code == ErrorCode.EMPTY_IMPULSE_RESPONSE

    def test_complex_impulse_response_rejected(self):
        """复数脉冲响应不会被静默截断为实部"""
        with pytest.raises(ImpulseResponseError) as exc_info:
            ShorttimeSpectralConvolver(np.array([1 + 2j, 0.5 + 0j]), 4)

        assert exc_info.value.error_code == ErrorCode.INVALID_IMPULSE_RESPONSE
        assert exc_info.value.context["ir_info"]["dtype"] == "complex128"

    @pytest.mark.parametrize("ir", [
        [[1.0, 0.0], [0.0, 1.0]],
        [1.0, float("nan")],
        [float("inf")],
        ["abc"],
        np.array([1 + 2j, 0.5]),
        [1.0, 0.5j],
    ])
    def test_invalid_impulse_response(self, ir):
        """测试无效脉冲响应"""
        with pytest.raises(ImpulseResponseError):
            ShorttimeSpectralConvolver(ir, 4)

    def test_private_planner_created(self):
        """未注入规划器时创建私有规划器"""
        a = ShorttimeSpectralConvolver([1.0], 4)
        b = ShorttimeSpectralConvolver([1.0], 4)

        assert isinstance(a.planner, SpectralPlanner)
        assert a.planner is not b.planner

    def test_injected_planner_shared(self):
        """注入的规划器在多个卷积器之间共享"""
        planner = SpectralPlanner()
        a = ShorttimeSpectralConvolver([1.0, 0.5], 7, planner)
        b = ShorttimeSpectralConvolver([0.25, 0.5], 7, planner)

        assert a.planner is planner
        assert b.planner is planner
        # 两个脉冲响应频谱使用同一个正变换计划
        stats = planner.get_stats()
        assert stats.cached_plans == 1
        assert stats.cache_hits == 1


class TestConvolverStreaming:
    """流式处理性质测试"""

    @pytest.mark.parametrize("window_size", [1, 4, 7, 16])
    def test_identity_impulse_response(self, window_size):
        """单位脉冲响应：输出是输入延迟window_size个样本"""
        rng = np.random.default_rng(10)
        x = rng.standard_normal(100)
        convolver = ShorttimeSpectralConvolver([1.0], window_size)

        out = run(convolver, x)

        np.testing.assert_array_equal(out[:window_size], 0.0)
        np.testing.assert_allclose(out[window_size:], x[:-window_size], atol=1e-12)

    @pytest.mark.parametrize("window_size", [1, 3, 8, 32])
    def test_zero_impulse_response(self, window_size):
        """全零脉冲响应：输出恒为零"""
        rng = np.random.default_rng(11)
        convolver = ShorttimeSpectralConvolver(np.zeros(5), window_size)

        out = run(convolver, rng.standard_normal(120))

        np.testing.assert_allclose(out, 0.0, atol=1e-12)

    @pytest.mark.parametrize("ir_length,window_size", [
        (3, 8),     # 脉冲响应短于窗口
        (37, 8),    # 脉冲响应长于窗口，多个块的尾部重叠相加
        (16, 16),
        (100, 5),
    ])
    def test_matches_direct_convolution(self, ir_length, window_size):
        """与时域直接卷积一致"""
        rng = np.random.default_rng(ir_length * 100 + window_size)
        x = rng.standard_normal(64)
        ir = rng.standard_normal(ir_length)
        convolver = ShorttimeSpectralConvolver(ir, window_size)

        expected = reference_output(x, ir, window_size)
        padded_input = np.concatenate([x, np.zeros(len(expected) - len(x))])
        out = run(convolver, padded_input)

        np.testing.assert_allclose(out, expected, atol=1e-9)

    def test_linearity(self):
        """out(A) + out(B) == out(A + B)"""
        rng = np.random.default_rng(12)
        ir = rng.standard_normal(20)
        a = rng.standard_normal(90)
        b = rng.standard_normal(90)

        out_a = run(ShorttimeSpectralConvolver(ir, 8), a)
        out_b = run(ShorttimeSpectralConvolver(ir, 8), b)
        out_sum = run(ShorttimeSpectralConvolver(ir, 8), a + b)

        np.testing.assert_allclose(out_a + out_b, out_sum, atol=1e-9)

    def test_clear_returns_to_silence(self):
        """clear后输入padded_window_size个零，输出与新实例一样全为零"""
        rng = np.random.default_rng(13)
        convolver = ShorttimeSpectralConvolver(rng.standard_normal(9), 4)
        run(convolver, rng.standard_normal(30))

        convolver.clear()
        out = run(convolver, np.zeros(convolver.padded_window_size))

        np.testing.assert_array_equal(out, 0.0)
        assert convolver.internal_buffer_size == convolver.padded_window_size

    def test_clear_matches_fresh_instance(self):
        """clear后的行为与新建实例相同"""
        rng = np.random.default_rng(14)
        ir = rng.standard_normal(11)
        x = rng.standard_normal(50)

        used = ShorttimeSpectralConvolver(ir, 6)
        run(used, rng.standard_normal(17))  # 留下未完成的输入块
        used.clear()

        np.testing.assert_allclose(run(used, x),
                                   run(ShorttimeSpectralConvolver(ir, 6), x),
                                   atol=1e-12)

    def test_internal_buffer_size_constant(self):
        """输出窗口长度始终等于padded_window_size"""
        convolver = ShorttimeSpectralConvolver([1.0, -1.0, 0.5], 5)
        for sample in np.linspace(-1.0, 1.0, 23):
            convolver.compute(sample)
            assert convolver.internal_buffer_size == convolver.padded_window_size

    def test_compute_returns_float(self):
        """compute返回Python float"""
        convolver = ShorttimeSpectralConvolver([1.0], 1)
        assert isinstance(convolver.compute(np.float32(0.5)), float)
        assert isinstance(convolver.compute(1), float)

    def test_process_matches_compute(self):
        """process与逐样本compute结果一致"""
        rng = np.random.default_rng(15)
        ir = rng.standard_normal(12)
        x = rng.standard_normal(40)

        out_process = ShorttimeSpectralConvolver(ir, 4).process(x)
        out_compute = run(ShorttimeSpectralConvolver(ir, 4), x)

        assert out_process.dtype == np.float64
        np.testing.assert_array_equal(out_process, out_compute)

    def test_process_rejects_2d(self):
        """process只接受一维数据"""
        convolver = ShorttimeSpectralConvolver([1.0], 4)
        with pytest.raises(ValueError):
            convolver.process(np.zeros((2, 4)))

    def test_stats(self):
        """测试统计信息"""
        convolver = ShorttimeSpectralConvolver([1.0, 0.5, 0.25], 4)
        run(convolver, np.ones(10))

        stats = convolver.get_stats()

        assert stats.samples_processed == 10
        assert stats.blocks_processed == 2
        assert stats.window_size == 4
        assert stats.padded_window_size == 8
        assert stats.latency_samples == 4
        assert stats.ir_length == 3
        assert "10个样本" in stats.summary()
