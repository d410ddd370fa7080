"""
assembler - 段链展平为节点数组

每个节点保存 [入控制柄, 经过点, 出控制柄]。节点 i 的入控制柄来自第 i-1 段的 p2，
出控制柄来自第 i 段的 p1。曲线两端没有外部切线，首节点的入控制柄和末节点的
出控制柄取相邻内部控制柄关于端点的镜像。
"""

from dataclasses import dataclass

import numpy as np

from ..utils.vector import flip
from .cubic import CubicList


@dataclass
class FitResult:
    """
    拟合结果。

    Attributes:
        knots: (K, 3, dims) 节点数组 [入控制柄, 经过点, 出控制柄]
        orig_index: (K,) 每个节点对应的输入点索引，未请求时为 None
        corner_index: (C,) 每个角点所在的节点索引，未请求时为 None
    """

    knots: np.ndarray
    orig_index: np.ndarray | None = None
    corner_index: np.ndarray | None = None

    @property
    def knot_count(self) -> int:
        return len(self.knots)

    @property
    def segment_count(self) -> int:
        return len(self.knots) - 1

    @property
    def dims(self) -> int:
        return self.knots.shape[2]

    @property
    def points(self) -> np.ndarray:
        """(K, dims) 节点经过点"""
        return self.knots[:, 1]

    def flat(self) -> np.ndarray:
        """(K * 3 * dims,) 扁平缓冲区"""
        return self.knots.reshape(-1)

    def segments(self) -> np.ndarray:
        """
        还原每段的控制点。

        Returns:
            (K-1, 4, dims) 控制点 [p0, p1, p2, p3]
        """
        return np.stack(
            [
                self.knots[:-1, 1],
                self.knots[:-1, 2],
                self.knots[1:, 0],
                self.knots[1:, 1],
            ],
            axis=1,
        )

    def astype(self, dtype) -> "FitResult":
        """转换节点数组精度，索引数组保持不变"""
        return FitResult(self.knots.astype(dtype), self.orig_index, self.corner_index)


def cubic_list_as_array(
    clist: CubicList,
    index_last: int,
    calc_orig_index: bool = True,
) -> tuple[np.ndarray, np.ndarray | None]:
    """
    将段链展平为节点数组。

    Args:
        clist: 按曲线顺序排列的段链, 非空
        index_last: 最后一个节点对应的输入点索引
        calc_orig_index: 是否计算节点对应的输入点索引

    Returns:
        knots: (len(clist) + 1, 3, dims) 节点数组
        orig_index: (len(clist) + 1,) 输入点索引，未请求时为 None

    Raises:
        RuntimeError: orig_span 累计与 index_last 不一致
    """
    if len(clist) == 0:
        raise ValueError("cannot flatten an empty cubic list")

    cubics = np.stack([c.points for c in clist])  # (M, 4, dims)
    m = len(cubics)

    knots = np.empty((m + 1, 3, clist.dims))
    knots[0, 1] = cubics[0, 0]
    knots[1:, 1] = cubics[:, 3]
    knots[1:, 0] = cubics[:, 2]
    knots[:-1, 2] = cubics[:, 1]

    # 首末节点的外侧控制柄
    flip(knots[0, 1], knots[0, 2], out=knots[0, 0])
    flip(knots[-1, 1], knots[-1, 0], out=knots[-1, 2])

    orig_index = None
    if calc_orig_index:
        spans = np.array([c.orig_span for c in clist], dtype=np.intp)
        orig_index = np.empty(m + 1, dtype=np.intp)
        orig_index[-1] = index_last
        orig_index[:-1] = index_last - np.cumsum(spans[::-1])[::-1]
        if orig_index[0] != 0:
            raise RuntimeError(
                f"orig_span total {spans.sum()} does not reach index_last={index_last}"
            )

    return knots, orig_index
