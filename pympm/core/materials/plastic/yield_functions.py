# 文件: pympm/core/materials/plastic/yield_functions.py
"""
屈服函数模块

提供:
- MohrCoulombYield: 以不变量 (ε, ρ, θ) 表示的 Mohr-Coulomb 屈服准则

扩展指南:
    要添加新的屈服函数，只需创建一个类实现以下方法:
    - evaluate(invariants, strength) -> (f, yielded)
    - partials(invariants, strength) -> (∂f/∂ε, ∂f/∂ρ, ∂f/∂θ)
"""

from typing import Tuple
import numpy as np

from ..constants import YIELD_TOLERANCE
from .invariants import StressInvariants
from .softening import StrengthParameters


class MohrCoulombYield:
    """
    Mohr-Coulomb 屈服准则 (拉为正)

    F = √(3/2) ρ [sin(θ+π/3) / (√3 cosφ) + cos(θ+π/3) tanφ / 3]
        + (ε/3) tanφ - c

    Example:
        yield_fn = MohrCoulombYield()
        f, yielded = yield_fn.evaluate(compute_invariants(stress), strength)
    """

    def evaluate(
        self,
        inv: StressInvariants,
        strength: StrengthParameters
    ) -> Tuple[float, bool]:
        """
        计算屈服函数值

        Returns:
            f: 屈服函数值
            yielded: f > YIELD_TOLERANCE
        """
        phi = strength.friction
        f = (
            np.sqrt(1.5) * inv.rho * self._radial_factor(inv.lode_angle, phi)
            + (inv.epsilon / 3.0) * np.tan(phi)
            - strength.cohesion
        )
        return float(f), bool(f > YIELD_TOLERANCE)

    def partials(
        self,
        inv: StressInvariants,
        strength: StrengthParameters
    ) -> Tuple[float, float, float]:
        """
        屈服函数对中间变量的偏导

        Returns:
            (∂F/∂ε, ∂F/∂ρ, ∂F/∂θ)
        """
        phi = strength.friction
        theta = inv.lode_angle + np.pi / 3.0
        df_depsilon = np.tan(phi) / 3.0
        df_drho = np.sqrt(1.5) * self._radial_factor(inv.lode_angle, phi)
        df_dtheta = np.sqrt(1.5) * inv.rho * (
            np.cos(theta) / (np.sqrt(3.0) * np.cos(phi))
            - np.sin(theta) * np.tan(phi) / 3.0
        )
        return float(df_depsilon), float(df_drho), float(df_dtheta)

    @staticmethod
    def _radial_factor(lode_angle: float, phi: float) -> float:
        theta = lode_angle + np.pi / 3.0
        return (
            np.sin(theta) / (np.sqrt(3.0) * np.cos(phi))
            + np.cos(theta) * np.tan(phi) / 3.0
        )

    def __repr__(self) -> str:
        return "MohrCoulombYield()"
