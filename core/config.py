"""
config - 拟合参数配置
"""

from dataclasses import dataclass


@dataclass
class FitConfig:
    """曲线拟合可调参数"""

    iteration_max: int = 4  # 每个区间 Newton 重参数化的最大轮数
    max_depth: int | None = None  # 细分深度上限，达到后强制接受当前拟合；None 表示不限
    clamp_scale: float = 3.0  # 控制柄限制在加权中心 clamp_scale 倍半径的球内
    use_length_cache: bool = True  # 每个角点区间预先计算相邻点距离
    check_length_cache: bool = False  # 校验缓存与重新计算的距离完全一致
    det_epsilon: float = 1e-8  # 法方程行列式视为零的阈值
    det_perturbation: float = 1e-11  # 行列式退化时使用 c00 * c11 * det_perturbation

    def __post_init__(self):
        if self.iteration_max < 0:
            raise ValueError(f"iteration_max must be >= 0, got {self.iteration_max}")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0 or None, got {self.max_depth}")
        if not self.clamp_scale > 0.0:
            raise ValueError(f"clamp_scale must be positive, got {self.clamp_scale}")
        if self.det_epsilon < 0.0:
            raise ValueError(f"det_epsilon must be >= 0, got {self.det_epsilon}")
