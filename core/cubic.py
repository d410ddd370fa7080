"""
cubic - 三次 Bézier 段及段链

实现:
1. Cubic: 四个控制点 p0, p1, p2, p3 及其覆盖的原始采样区间数 orig_span
2. 曲线求值: de Casteljau 求值、Bernstein 形式的位置、一阶导数 (速度)、二阶导数 (加速度)
3. CubicList: 按曲线顺序追加的段链
"""

import numpy as np

from ..utils.vector import madd


class Cubic:
    """
    三次 Bézier 段。

    p0 与 p3 总是输入中的真实点，p1 与 p2 为拟合得到的控制柄。

    Attributes:
        points: (4, dims) 控制点 [p0, p1, p2, p3]
        orig_span: 该段覆盖的原始采样区间数
        error_sq: 接受该段时测得的最大平方误差 (闭式叶子段为 0)
    """

    __slots__ = ("points", "orig_span", "error_sq")

    def __init__(self, p0, p1, p2, p3, orig_span: int = 0, error_sq: float = 0.0):
        self.points = np.array([p0, p1, p2, p3], dtype=np.float64)
        self.orig_span = orig_span
        self.error_sq = error_sq

    @classmethod
    def from_handles(
        cls,
        p0: np.ndarray,
        p3: np.ndarray,
        tan_l: np.ndarray,
        tan_r: np.ndarray,
        alpha_l: float,
        alpha_r: float,
        orig_span: int,
    ) -> "Cubic":
        """
        由端点、切线和控制柄长度构造段。

        p1 = p0 + tan_l * alpha_l
        p2 = p3 - tan_r * alpha_r

        Args:
            p0, p3: (dims,) 端点
            tan_l, tan_r: (dims,) 沿行进方向的单位切线
            alpha_l, alpha_r: 控制柄长度
            orig_span: 覆盖的原始采样区间数
        """
        return cls(p0, madd(p0, tan_l, alpha_l), madd(p3, tan_r, -alpha_r), p3, orig_span)

    @classmethod
    def from_two_points(
        cls, p0: np.ndarray, p3: np.ndarray, tan_l: np.ndarray, tan_r: np.ndarray
    ) -> "Cubic":
        """两点区间的闭式解: 控制柄长度取端点距离的 1/3"""
        dist = np.linalg.norm(p3 - p0) / 3.0
        return cls.from_handles(p0, p3, tan_l, tan_r, dist, dist, orig_span=1)

    @property
    def dims(self) -> int:
        return self.points.shape[1]

    @property
    def p0(self) -> np.ndarray:
        return self.points[0]

    @property
    def p1(self) -> np.ndarray:
        return self.points[1]

    @property
    def p2(self) -> np.ndarray:
        return self.points[2]

    @property
    def p3(self) -> np.ndarray:
        return self.points[3]

    def evaluate(self, t: float | np.ndarray) -> np.ndarray:
        """
        de Casteljau 求值。

        Args:
            t: 标量参数或 (M,) 参数数组

        Returns:
            (dims,) 或 (M, dims) 曲线上的点
        """
        t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        s = 1.0 - t
        p0, p1, p2, p3 = self.points
        p01 = p0 * s + p1 * t
        p12 = p1 * s + p2 * t
        p23 = p2 * s + p3 * t
        return (p01 * s + p12 * t) * s + (p12 * s + p23 * t) * t

    def calc_point(self, t: float | np.ndarray) -> np.ndarray:
        """Bernstein 形式求值 C(t)"""
        t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        s = 1.0 - t
        p0, p1, p2, p3 = self.points
        return p0 * s * s * s + 3.0 * t * s * (s * p1 + t * p2) + t * t * t * p3

    def calc_speed(self, t: float | np.ndarray) -> np.ndarray:
        """一阶导数 C'(t)"""
        t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        s = 1.0 - t
        p0, p1, p2, p3 = self.points
        return 3.0 * ((p1 - p0) * s * s + 2.0 * (p2 - p1) * s * t + (p3 - p2) * t * t)

    def calc_acceleration(self, t: float | np.ndarray) -> np.ndarray:
        """二阶导数 C''(t)"""
        t = np.asarray(t, dtype=np.float64)[..., np.newaxis]
        s = 1.0 - t
        p0, p1, p2, p3 = self.points
        return 6.0 * ((p2 - 2.0 * p1 + p0) * s + (p3 - 2.0 * p2 + p1) * t)

    def __repr__(self) -> str:
        return f"Cubic(dims={self.dims}, orig_span={self.orig_span}, error_sq={self.error_sq:.3g})"


class CubicList:
    """
    Cubic 段链。

    拟合过程按最终曲线顺序追加段，展平时无需反转。
    """

    def __init__(self, dims: int):
        self.dims = dims
        self.items: list[Cubic] = []

    def append(self, cubic: Cubic):
        if cubic.dims != self.dims:
            raise ValueError(f"cubic has dims={cubic.dims}, chain expects {self.dims}")
        self.items.append(cubic)

    def clear(self):
        self.items.clear()

    def total_span(self) -> int:
        """所有段 orig_span 之和"""
        return sum(c.orig_span for c in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> Cubic:
        return self.items[index]

    def __repr__(self) -> str:
        return f"CubicList(len={len(self.items)}, dims={self.dims})"
