"""
parameterize - 弦长参数化

实现:
1. 相邻点距离缓存 (每个角点区间计算一次，子区间切片复用)
2. 弦长参数化，u[0]=0, u[-1]=1
"""

import numpy as np


def points_length_cache(points: np.ndarray) -> np.ndarray:
    """
    计算相邻点距离缓存。

    Args:
        points: (N, dims) 区间内的点

    Returns:
        cache: (N,) cache[0]=0, cache[i]=|p[i] - p[i-1]|
    """
    cache = np.zeros(len(points))
    cache[1:] = np.linalg.norm(np.diff(points, axis=0), axis=1)
    return cache


def chord_length_parameterize(
    points: np.ndarray,
    length_cache: np.ndarray | None = None,
    check_cache: bool = False,
) -> np.ndarray:
    """
    弦长参数化方法。

    按累积弦长分配参数值，并以区间总长归一化。

    Args:
        points: (N, dims) 区间内的点, N >= 2
        length_cache: 可选 (N,) 相邻点距离缓存，索引与 points 一致
        check_cache: 校验缓存与重新计算的距离完全一致

    Returns:
        u: (N,) 参数值数组, u[0]=0, u[-1]=1

    Raises:
        ValueError: 区间总长为零，或缓存与点不一致
    """
    if length_cache is None:
        lengths = points_length_cache(points)
    else:
        lengths = np.array(length_cache, dtype=np.float64)
        lengths[0] = 0.0
        if check_cache and not np.array_equal(lengths, points_length_cache(points)):
            raise ValueError("length cache does not match the point span")

    u = np.cumsum(lengths)
    total = u[-1]
    if total == 0.0:
        raise ValueError("cannot parameterize a span of zero length")

    u /= total
    u[-1] = 1.0
    return u


if __name__ == "__main__":
    print("=== 弦长参数化测试 ===")

    points = np.array([[0, 0], [1, 0], [3, 0], [6, 0]], dtype=float)
    cache = points_length_cache(points)
    u = chord_length_parameterize(points, cache, check_cache=True)
    print(f"距离缓存: {cache}")
    print(f"参数值: {u}")
