# 文件: pympm/core/materials/plastic/invariants.py
"""
应力不变量模块

计算 Mohr-Coulomb 屈服面所需的不变量:
    p, s, J2, J3, Lode 角 θ, ρ = √(2 J2), ε = I1 / √3

纯函数，结果为不可变值对象，每次调用重新计算，不保存。
"""

from dataclasses import dataclass
import numpy as np

from ..constants import LODE_RATIO_LIMIT
from ..interfaces import mask_voigt


@dataclass(frozen=True)
class StressInvariants:
    """
    应力不变量

    Attributes:
        mean_stress: 平均应力 p
        deviatoric: 偏应力 Voigt 向量 s (6,)
        j2: 第二偏应力不变量
        j3: 第三偏应力不变量
        lode_angle: Lode 角 θ ∈ [0, π/3]
        rho: 广义半径 ρ = √(2 J2)
        epsilon: 静水轴分量 ε = (σ1+σ2+σ3) / √3
    """
    mean_stress: float
    deviatoric: np.ndarray
    j2: float
    j3: float
    lode_angle: float
    rho: float
    epsilon: float


def lode_ratio(j2: float, j3: float) -> float:
    """
    r = (3√3/2) J3 / J2^1.5

    J2 为 0 时 r = 0，不做截断。
    """
    if abs(j2) > 0.0:
        return (3.0 * np.sqrt(3.0) / 2.0) * (j3 / j2 ** 1.5)
    return 0.0


def compute_invariants(stress: np.ndarray, dim: int = 3) -> StressInvariants:
    """
    计算应力不变量

    Args:
        stress: 应力 Voigt 向量 (6,) [σxx, σyy, σzz, σxy, σyz, σzx]
        dim: 维度 (2D 时 σyz, σzx 不参与)

    Returns:
        StressInvariants
    """
    sig = mask_voigt(stress, dim)

    p = (sig[0] + sig[1] + sig[2]) / 3.0
    s = sig.copy()
    s[:3] -= p

    j2 = ((sig[0] - sig[1]) ** 2 + (sig[1] - sig[2]) ** 2 + (sig[0] - sig[2]) ** 2) / 6.0
    j2 += sig[3] ** 2 + sig[4] ** 2 + sig[5] ** 2

    # det(s)，2D 时后三项为 0
    j3 = s[0] * s[1] * s[2] - s[2] * s[3] ** 2
    j3 += 2.0 * s[3] * s[4] * s[5] - s[0] * s[4] ** 2 - s[1] * s[5] ** 2

    r = np.clip(lode_ratio(j2, j3), -LODE_RATIO_LIMIT, LODE_RATIO_LIMIT)
    theta = float(np.clip(np.arccos(r) / 3.0, 0.0, np.pi / 3.0))

    return StressInvariants(
        mean_stress=float(p),
        deviatoric=s,
        j2=float(j2),
        j3=float(j3),
        lode_angle=theta,
        rho=float(np.sqrt(2.0 * j2)),
        epsilon=float((sig[0] + sig[1] + sig[2]) / np.sqrt(3.0)),
    )
