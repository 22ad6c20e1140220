# 文件: pympm/core/materials/state.py
"""
材料状态管理

PlasticState: 粒子内变量容器，由调用方持有，每次应力更新后原地累加
MaterialPoint: 最简粒子访问实现 (应变率、压力)
"""

from dataclasses import dataclass, field
from typing import List
import numpy as np


@dataclass
class PlasticState:
    """
    塑性材料状态容器

    Attributes:
        equivalent_plastic_strain: 累积等效塑性偏应变 ε̄ᵖ (驱动软化)
        plastic_strain: 累积塑性应变 Voigt 向量 (工程剪切)

    Example:
        state = PlasticState()
        # ... 材料计算 ...
        committed_state = state.copy()  # 收敛后保存
    """

    equivalent_plastic_strain: float = 0.0
    plastic_strain: np.ndarray = field(default_factory=lambda: np.zeros(6))

    def accumulate(self, dpstrain: np.ndarray, dpdstrain: float) -> None:
        """
        累加一个增量步的塑性应变

        Args:
            dpstrain: 塑性应变增量 (6,)
            dpdstrain: 等效塑性偏应变增量
        """
        self.plastic_strain = self.plastic_strain + dpstrain
        self.equivalent_plastic_strain += dpdstrain

    def copy(self) -> 'PlasticState':
        """深拷贝"""
        return PlasticState(
            equivalent_plastic_strain=self.equivalent_plastic_strain,
            plastic_strain=self.plastic_strain.copy()
        )

    def reset(self) -> None:
        """重置为初始状态"""
        self.equivalent_plastic_strain = 0.0
        self.plastic_strain = np.zeros(6)

    def __repr__(self) -> str:
        return (
            f"PlasticState(ep={self.equivalent_plastic_strain:.6f}, "
            f"plastic_strain_max={np.max(np.abs(self.plastic_strain)):.2e})"
        )


@dataclass
class MaterialPoint:
    """
    粒子访问接口的最简实现

    每个相保存一个应变率向量 (工程剪切) 和一个压力值。
    """

    strain_rates: List[np.ndarray] = field(default_factory=lambda: [np.zeros(6)])
    pressures: List[float] = field(default_factory=lambda: [0.0])

    def strain_rate(self, phase: int = 0) -> np.ndarray:
        return np.asarray(self.strain_rates[phase], dtype=float)

    def pressure(self, phase: int = 0) -> float:
        return float(self.pressures[phase])
