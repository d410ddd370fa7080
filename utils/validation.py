"""
validation - 输入校验与错误类型

公共入口的前置条件 (点数组、维度、误差阈值、角点列表) 在这里集中检查，
违反约定时抛出 InvalidInputError，而不是让拟合过程产生未定义结果。
"""

import numpy as np


class InvalidInputError(ValueError):
    """输入违反拟合前置条件"""


class CurveFitResourceError(RuntimeError):
    """拟合过程中内存等资源不足"""


def as_points_array(points, dims: int | None = None) -> np.ndarray:
    """
    将输入转换为 (N, dims) 的 float64 点数组。

    Args:
        points: (N, dims) 点数组，或配合 dims 使用的一维扁平缓冲区 (N * dims,)
        dims: 每个点的维度，仅在输入为扁平缓冲区时必需

    Returns:
        (N, dims) float64 数组

    Raises:
        InvalidInputError: 形状、维度或数值不合法
    """
    arr = np.asarray(points, dtype=np.float64)

    if arr.ndim == 1:
        if dims is None:
            raise InvalidInputError("dims is required for a flat point buffer")
        if dims < 1:
            raise InvalidInputError(f"dims must be >= 1, got {dims}")
        if arr.size % dims != 0:
            raise InvalidInputError(
                f"flat buffer of {arr.size} values is not divisible by dims={dims}"
            )
        arr = arr.reshape(-1, dims)
    elif arr.ndim == 2:
        if dims is not None and arr.shape[1] != dims:
            raise InvalidInputError(
                f"points have {arr.shape[1]} columns but dims={dims}"
            )
    else:
        raise InvalidInputError(f"points must be 1-D or 2-D, got shape {arr.shape}")

    if arr.shape[1] < 1:
        raise InvalidInputError(f"dims must be >= 1, got {arr.shape[1]}")
    if len(arr) == 0:
        raise InvalidInputError("at least one point is required")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("points contain non-finite values")

    return arr


def validate_error_threshold(error_threshold: float) -> float:
    """误差阈值必须为正的有限数"""
    value = float(error_threshold)
    if not np.isfinite(value) or value <= 0.0:
        raise InvalidInputError(f"error_threshold must be positive and finite, got {error_threshold}")
    return value


def validate_corners(corners, points: np.ndarray) -> np.ndarray:
    """
    检查角点索引列表并返回 int 数组。

    约定:
        - 严格递增，首元素为 0，末元素为 N-1
        - 单点输入允许 [0, 0]
        - 每个角点区间的总长度非零 (弦长参数化要求)

    Args:
        corners: 角点索引序列，None 表示 [0, N-1]
        points: (N, dims) 点数组

    Returns:
        (C,) 角点索引数组

    Raises:
        InvalidInputError: 角点列表不合法
    """
    n = len(points)

    if corners is None:
        return np.array([0, n - 1], dtype=np.intp)

    arr = np.asarray(corners)
    if arr.ndim != 1 or len(arr) < 2:
        raise InvalidInputError(f"corners must be a sequence of at least 2 indices, got {corners!r}")
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidInputError(f"corners must be integers, got dtype {arr.dtype}")
    arr = arr.astype(np.intp)

    if arr[0] != 0:
        raise InvalidInputError(f"first corner must be 0, got {arr[0]}")
    if arr[-1] != n - 1:
        raise InvalidInputError(f"last corner must be {n - 1}, got {arr[-1]}")

    if n == 1:
        if len(arr) != 2:
            raise InvalidInputError(f"a single point only accepts corners [0, 0], got {corners!r}")
        return arr

    if np.any(np.diff(arr) <= 0):
        raise InvalidInputError(f"corners must be strictly increasing, got {corners!r}")

    for first, last in zip(arr[:-1], arr[1:]):
        span = points[first:last + 1]
        if not np.any(span != span[0]):
            raise InvalidInputError(
                f"corner span [{first}, {last}] has zero length"
            )

    return arr
