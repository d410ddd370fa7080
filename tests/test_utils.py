"""
utils 模块单元测试
"""

import numpy as np
import pytest

from curve_fit_nd.utils.validation import (
    InvalidInputError,
    as_points_array,
    validate_corners,
    validate_error_threshold,
)
from curve_fit_nd.utils.vector import (
    add,
    distance,
    dot,
    equals,
    flip,
    length,
    madd,
    normalize,
    normalize_diff,
    scale,
    sub,
)


class TestVector:
    """向量运算测试"""

    def test_add_sub_scale(self):
        """测试加减与缩放"""
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([0.5, -1.0, 2.0])
        np.testing.assert_allclose(add(a, b), [1.5, 1.0, 5.0])
        np.testing.assert_allclose(sub(a, b), [0.5, 3.0, 1.0])
        np.testing.assert_allclose(scale(a, 2.0), [2.0, 4.0, 6.0])

    def test_inplace_variants(self):
        """测试原地版本写入输出缓冲区"""
        a = np.array([1.0, 2.0])
        b = np.array([3.0, 4.0])
        out = np.zeros(2)

        result = add(a, b, out=out)
        assert result is out
        np.testing.assert_allclose(out, [4.0, 6.0])

        madd(a, b, 0.5, out=out)
        np.testing.assert_allclose(out, [2.5, 4.0])

        # 输入不被修改
        np.testing.assert_allclose(a, [1.0, 2.0])

    def test_dot_and_length(self):
        """测试点积与长度"""
        v = np.array([3.0, 4.0])
        assert np.isclose(dot(v, v), 25.0)
        assert np.isclose(length(v), 5.0)
        assert np.isclose(distance(np.zeros(2), v), 5.0)

    def test_dot_batch(self):
        """测试批量点积"""
        a = np.array([[1.0, 0.0], [1.0, 2.0]])
        b = np.array([[2.0, 5.0], [3.0, 1.0]])
        np.testing.assert_allclose(dot(a, b), [2.0, 5.0])

    def test_normalize_single_vector(self):
        """测试单向量归一化"""
        result = normalize(np.array([3.0, 4.0, 0.0]))
        np.testing.assert_allclose(result, [0.6, 0.8, 0.0])

    def test_normalize_batch(self):
        """测试批量向量归一化"""
        vectors = np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 5.0]])
        norms = np.linalg.norm(normalize(vectors), axis=1)
        np.testing.assert_allclose(norms, [1.0, 1.0])

    def test_normalize_diff(self):
        """测试两点方向"""
        result = normalize_diff(np.array([1.0, 1.0]), np.array([4.0, 5.0]))
        np.testing.assert_allclose(result, [0.6, 0.8])

    def test_normalize_diff_integer_input(self):
        """测试整数输入返回浮点结果"""
        result = normalize_diff(np.array([0, 0]), np.array([0, 2]))
        np.testing.assert_allclose(result, [0.0, 1.0])

    def test_flip(self):
        """测试控制柄镜像"""
        point = np.array([1.0, 1.0])
        handle = np.array([2.0, 3.0])
        np.testing.assert_allclose(flip(point, handle), [0.0, -1.0])

        out = np.empty(2)
        flip(point, handle, out=out)
        np.testing.assert_allclose(out, [0.0, -1.0])

    def test_equals(self):
        """测试坐标完全相同"""
        assert equals(np.array([1.0, 2.0]), np.array([1.0, 2.0]))
        assert not equals(np.array([1.0, 2.0]), np.array([1.0, 2.0 + 1e-12]))


class TestPointsValidation:
    """点数组校验测试"""

    def test_two_dimensional_input(self):
        """测试 (N, dims) 输入"""
        points = as_points_array([[0, 0], [1, 1]])
        assert points.shape == (2, 2)
        assert points.dtype == np.float64

    def test_flat_buffer(self):
        """测试扁平缓冲区配合 dims"""
        points = as_points_array([0.0, 0.0, 0.0, 1.0, 2.0, 3.0], dims=3)
        np.testing.assert_allclose(points, [[0, 0, 0], [1, 2, 3]])

    def test_flat_buffer_requires_dims(self):
        """测试扁平缓冲区缺少 dims"""
        with pytest.raises(InvalidInputError):
            as_points_array([0.0, 1.0, 2.0])

    def test_flat_buffer_not_divisible(self):
        """测试扁平缓冲区长度不能整除 dims"""
        with pytest.raises(InvalidInputError):
            as_points_array([0.0, 1.0, 2.0], dims=2)

    def test_zero_dims(self):
        """测试零维度"""
        with pytest.raises(InvalidInputError):
            as_points_array(np.zeros((3, 0)))
        with pytest.raises(InvalidInputError):
            as_points_array([0.0, 1.0], dims=0)

    def test_dims_mismatch(self):
        """测试列数与 dims 不一致"""
        with pytest.raises(InvalidInputError):
            as_points_array(np.zeros((3, 2)), dims=3)

    def test_empty_input(self):
        """测试空输入"""
        with pytest.raises(InvalidInputError):
            as_points_array(np.zeros((0, 2)))

    def test_non_finite(self):
        """测试非有限坐标"""
        with pytest.raises(InvalidInputError):
            as_points_array([[0.0, 0.0], [np.nan, 1.0]])

    def test_error_is_value_error(self):
        """测试错误类型继承 ValueError"""
        assert issubclass(InvalidInputError, ValueError)


class TestThresholdValidation:
    """误差阈值校验测试"""

    def test_positive(self):
        assert validate_error_threshold(0.5) == 0.5

    @pytest.mark.parametrize("value", [0.0, -1.0, np.nan, np.inf])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError):
            validate_error_threshold(value)


class TestCornersValidation:
    """角点列表校验测试"""

    @pytest.fixture
    def points(self):
        return np.array([[0, 0], [1, 0], [2, 0], [2, 1], [2, 2]], dtype=float)

    def test_default_corners(self, points):
        """测试默认角点为首尾"""
        np.testing.assert_array_equal(validate_corners(None, points), [0, 4])

    def test_valid_corners(self, points):
        np.testing.assert_array_equal(validate_corners([0, 2, 4], points), [0, 2, 4])

    @pytest.mark.parametrize(
        "corners",
        [
            [1, 4],  # 首元素不为 0
            [0, 3],  # 末元素不为 N-1
            [0, 2, 2, 4],  # 非严格递增
            [0, 3, 2, 4],  # 非单调
            [0],  # 元素不足
            [0, 5],  # 越界
            [0.0, 4.0],  # 非整数
        ],
    )
    def test_invalid_corners(self, points, corners):
        with pytest.raises(InvalidInputError):
            validate_corners(corners, points)

    def test_zero_length_span(self):
        """测试零长度角点区间"""
        points = np.array([[0, 0], [1, 0], [1, 0], [2, 0]], dtype=float)
        with pytest.raises(InvalidInputError):
            validate_corners([0, 1, 2, 3], points)

    def test_single_point(self):
        """测试单点输入的角点"""
        points = np.array([[1.0, 1.0]])
        np.testing.assert_array_equal(validate_corners(None, points), [0, 0])
        np.testing.assert_array_equal(validate_corners([0, 0], points), [0, 0])
        with pytest.raises(InvalidInputError):
            validate_corners([0, 0, 0], points)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
