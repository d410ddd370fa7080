"""
vector - 任意维度向量运算

提供定长数值向量 (dims,) 的加减、缩放、点积、长度与归一化。
带 out 参数的函数将结果写入给定缓冲区 (原地版本)，其余函数无副作用。
"""

import numpy as np


def add(a: np.ndarray, b: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """a + b"""
    return np.add(a, b, out=out)


def sub(a: np.ndarray, b: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """a - b"""
    return np.subtract(a, b, out=out)


def scale(v: np.ndarray, f: float, out: np.ndarray | None = None) -> np.ndarray:
    """v * f"""
    return np.multiply(v, f, out=out)


def madd(a: np.ndarray, v: np.ndarray, f: float, out: np.ndarray | None = None) -> np.ndarray:
    """
    a + v * f，用于沿切线方向放置控制柄。

    Args:
        a: (dims,) 起点
        v: (dims,) 方向
        f: 标量系数
        out: 可选输出缓冲区

    Returns:
        (dims,) 结果向量
    """
    if out is None:
        return a + v * f
    np.multiply(v, f, out=out)
    out += a
    return out


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """点积，支持 (m, dims) 批量输入，返回 (m,)"""
    return np.sum(np.multiply(a, b), axis=-1)


def length_squared(v: np.ndarray) -> float:
    """向量长度的平方"""
    return dot(v, v)


def length(v: np.ndarray) -> float:
    """向量长度"""
    return np.sqrt(length_squared(v))


def distance_squared(a: np.ndarray, b: np.ndarray) -> float:
    """两点距离的平方"""
    return length_squared(np.subtract(a, b))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """两点距离"""
    return np.sqrt(distance_squared(a, b))


def normalize(v: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    将向量归一化为单位向量。

    Args:
        v: 单个向量 (dims,) 或向量数组 (m, dims)
        out: 可选输出缓冲区

    Returns:
        归一化后的单位向量，与输入形状相同

    Note:
        零长度向量由调用方负责避免，此处不做保护。
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v, axis=-1, keepdims=v.ndim > 1)
    return np.divide(v, norm, out=out)


def normalize_diff(a: np.ndarray, b: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    计算从 a 指向 b 的单位向量。

    Args:
        a: (dims,) 起点
        b: (dims,) 终点
        out: 可选输出缓冲区

    Returns:
        (dims,) 单位方向向量 (b - a) / |b - a|
    """
    d = np.subtract(b, a, out=out, dtype=np.float64)
    d /= np.linalg.norm(d)
    return d


def flip(point: np.ndarray, handle: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    将控制柄关于端点镜像: 2 * point - handle。

    Args:
        point: (dims,) 端点
        handle: (dims,) 控制柄
        out: 可选输出缓冲区

    Returns:
        (dims,) 镜像后的控制柄
    """
    if out is None:
        return 2.0 * np.asarray(point) - handle
    np.multiply(point, 2.0, out=out)
    out -= handle
    return out


def equals(a: np.ndarray, b: np.ndarray) -> bool:
    """两点坐标是否完全相同"""
    return bool(np.array_equal(a, b))


if __name__ == "__main__":
    print("=== 向量运算测试 ===")

    a = np.array([1.0, 2.0, 2.0])
    b = np.array([4.0, 6.0, 2.0])
    print(f"a + b = {add(a, b)}")
    print(f"|a| = {length(a):.3f}")
    print(f"dist(a, b) = {distance(a, b):.3f}")
    print(f"a -> b 方向: {normalize_diff(a, b)}")
    print(f"flip(a, b) = {flip(a, b)}")
