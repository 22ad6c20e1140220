# 文件: pympm/core/materials/plastic/flow_rules.py
"""
流动法则模块

通过中间变量 (ε, ρ, θ) 的链式法则计算:
- ∂F/∂σ: 屈服函数梯度
- ∂P/∂σ: 非关联塑性势梯度 (Menetrey-Willam 双曲塑性势，使用剪胀角 ψ)

提供:
- invariant_gradients(): ∂ε/∂σ, ∂ρ/∂σ, ∂θ/∂σ
- MenetreyWillamPotential: 圆化的 Mohr-Coulomb 塑性势
- NonAssociatedFlow: 组合屈服函数与塑性势，输出 FlowGradients

所有分母 (ρ, J2, 圆化函数分母, 根号内的量) 在除法前截断到正下限。
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np

from ..constants import (
    HYPERBOLIC_ECCENTRICITY,
    J2_TOLERANCE,
    LODE_RADICAND_FLOOR,
    MW_DENOMINATOR_FLOOR,
    MW_ECCENTRICITY_MIN,
    MW_RADICAND_FLOOR,
    POTENTIAL_RADICAND_FLOOR,
)
from ..interfaces import voigt_mask
from .invariants import StressInvariants, lode_ratio
from .softening import StrengthParameters
from .yield_functions import MohrCoulombYield


_DEPSILON_DSIGMA = np.array([1.0, 1.0, 1.0, 0.0, 0.0, 0.0]) / np.sqrt(3.0)


@dataclass(frozen=True)
class InvariantGradients:
    """中间变量对应力的梯度 (6,)"""
    depsilon: np.ndarray
    drho: np.ndarray
    dtheta: np.ndarray

    def compose(self, partials: Tuple[float, float, float]) -> np.ndarray:
        """∂g/∂σ = ∂g/∂ε ∂ε/∂σ + ∂g/∂ρ ∂ρ/∂σ + ∂g/∂θ ∂θ/∂σ"""
        dg_depsilon, dg_drho, dg_dtheta = partials
        return dg_depsilon * self.depsilon + dg_drho * self.drho + dg_dtheta * self.dtheta


@dataclass(frozen=True)
class FlowGradients:
    """
    Attributes:
        df_dsigma: 屈服函数梯度 (6,)
        dp_dsigma: 塑性势梯度 (流动方向) (6,)
    """
    df_dsigma: np.ndarray
    dp_dsigma: np.ndarray


def invariant_gradients(inv: StressInvariants, dim: int = 3) -> InvariantGradients:
    """
    计算 ∂ε/∂σ, ∂ρ/∂σ, ∂θ/∂σ

    ∂θ/∂σ = ∂θ/∂r (∂r/∂J2 ∂J2/∂σ + ∂r/∂J3 ∂J3/∂σ)
    其中 ∂J2/∂σ = s，∂J3/∂σ 由偏应力矩阵的三行组成。
    """
    mask = voigt_mask(dim)
    s = inv.deviatoric
    j2, j3 = inv.j2, inv.j3

    if inv.rho > 0.0:
        drho = s / inv.rho * mask
    else:
        drho = np.zeros(6)

    # r 不截断，(1 - r²) 非正时取下限
    r = lode_ratio(j2, j3)
    radicand = 1.0 - r * r
    if radicand <= 0.0:
        radicand = LODE_RADICAND_FLOOR
    dtheta_dr = -1.0 / (3.0 * np.sqrt(radicand))

    dr_dj2 = (-9.0 * np.sqrt(3.0) / 4.0) * j3
    dr_dj3 = 1.5 * np.sqrt(3.0)
    if abs(j2) > J2_TOLERANCE:
        dr_dj2 /= j2 ** 2.5
        dr_dj3 /= j2 ** 1.5

    # 偏应力矩阵的行: x, y, z
    row_x = np.array([s[0], s[3], s[5]])
    row_y = np.array([s[3], s[1], s[4]])
    row_z = np.array([s[5], s[4], s[2]])

    dj3_dsigma = np.array([
        row_x @ row_x - (2.0 / 3.0) * j2,
        row_y @ row_y - (2.0 / 3.0) * j2,
        row_z @ row_z - (2.0 / 3.0) * j2,
        row_x @ row_y,
        row_y @ row_z,
        row_x @ row_z,
    ])

    dtheta = dtheta_dr * (dr_dj2 * s + dr_dj3 * dj3_dsigma) * mask

    return InvariantGradients(
        depsilon=_DEPSILON_DSIGMA.copy(),
        drho=drho,
        dtheta=dtheta,
    )


class MenetreyWillamPotential:
    """
    Menetrey-Willam 双曲塑性势

    P = √((ξ c tanψ)² + (R_mw(θ) q)²) + (ε/3) tanψ,   q = √(3/2) ρ

    圆化函数:
        R_mw = R_mc · l / m
        R_mc = (3 - sinφ) / (6 cosφ)
        e    = (3 - sinφ) / (3 + sinφ),  e ∈ (0.5, 1]
        l    = 4(1-e²)cos²θ + (2e-1)²
        m    = 2(1-e²)cosθ + (2e-1)√S
        S    = 4(1-e²)cos²θ + 5e² - 4e

    偏平面上光滑，消除三轴压缩 / 拉伸角点处的梯度不连续。

    Attributes:
        eccentricity: 子午面双曲偏心率 ξ
    """

    def __init__(self, eccentricity: float = HYPERBOLIC_ECCENTRICITY):
        self.eccentricity = float(eccentricity)

    def rounding(self, lode_angle: float, phi: float) -> Tuple[float, float]:
        """
        圆化函数及其对 θ 的导数

        Returns:
            (R_mw, ∂R_mw/∂θ)
        """
        sin_phi, cos_phi = np.sin(phi), np.cos(phi)
        e = np.clip((3.0 - sin_phi) / (3.0 + sin_phi), MW_ECCENTRICITY_MIN, 1.0)
        one_e2 = 1.0 - e * e
        cos_t, sin_t = np.cos(lode_angle), np.sin(lode_angle)

        sqpart = 4.0 * one_e2 * cos_t ** 2 + 5.0 * e * e - 4.0 * e
        if sqpart < MW_RADICAND_FLOOR:
            sqpart = MW_RADICAND_FLOOR

        l = 4.0 * one_e2 * cos_t ** 2 + (2.0 * e - 1.0) ** 2
        m = 2.0 * one_e2 * cos_t + (2.0 * e - 1.0) * np.sqrt(sqpart)
        if abs(m) < MW_DENOMINATOR_FLOOR:
            m = MW_DENOMINATOR_FLOOR

        r_mc = (3.0 - sin_phi) / (6.0 * cos_phi)

        dl_dtheta = -8.0 * one_e2 * cos_t * sin_t
        dm_dtheta = -2.0 * one_e2 * sin_t + 0.5 * (2.0 * e - 1.0) * dl_dtheta / np.sqrt(sqpart)

        r_mw = (l / m) * r_mc
        dr_mw = r_mc * (m * dl_dtheta - l * dm_dtheta) / (m * m)
        return float(r_mw), float(dr_mw)

    def evaluate(self, inv: StressInvariants, strength: StrengthParameters) -> float:
        """塑性势值 P"""
        tan_psi = np.tan(strength.dilation)
        r_mw, _ = self.rounding(inv.lode_angle, strength.friction)
        omega = self._omega(inv.rho, r_mw, strength.cohesion, tan_psi)
        return float(np.sqrt(omega) + (inv.epsilon / 3.0) * tan_psi)

    def partials(
        self,
        inv: StressInvariants,
        strength: StrengthParameters
    ) -> Tuple[float, float, float]:
        """
        塑性势对中间变量的偏导

        Returns:
            (∂P/∂ε, ∂P/∂ρ, ∂P/∂θ)
        """
        tan_psi = np.tan(strength.dilation)
        r_mw, dr_mw = self.rounding(inv.lode_angle, strength.friction)
        sqrt_omega = np.sqrt(self._omega(inv.rho, r_mw, strength.cohesion, tan_psi))

        dp_depsilon = tan_psi / 3.0
        dp_drho = 1.5 * inv.rho * r_mw * r_mw / sqrt_omega
        dp_dtheta = 1.5 * inv.rho * inv.rho * r_mw * dr_mw / sqrt_omega
        return float(dp_depsilon), float(dp_drho), float(dp_dtheta)

    def _omega(self, rho: float, r_mw: float, cohesion: float, tan_psi: float) -> float:
        q = np.sqrt(1.5) * rho
        omega = (self.eccentricity * cohesion * tan_psi) ** 2 + (r_mw * q) ** 2
        if omega < POTENTIAL_RADICAND_FLOOR:
            omega = POTENTIAL_RADICAND_FLOOR
        return omega

    def __repr__(self) -> str:
        return f"MenetreyWillamPotential(eccentricity={self.eccentricity})"


class NonAssociatedFlow:
    """
    非关联流动法则

    组合屈服函数 (使用 φ) 与塑性势 (使用 ψ)，在同一组不变量梯度上
    用链式法则组装 ∂F/∂σ 与 ∂P/∂σ。2D 时第 5、6 分量置零。

    Example:
        flow = NonAssociatedFlow(MohrCoulombYield(), MenetreyWillamPotential())
        grads = flow.gradients(inv, strength, dim=3)
    """

    def __init__(self, yield_fn: MohrCoulombYield, potential: MenetreyWillamPotential):
        self.yield_fn = yield_fn
        self.potential = potential

    def gradients(
        self,
        inv: StressInvariants,
        strength: StrengthParameters,
        dim: int = 3
    ) -> FlowGradients:
        grads = invariant_gradients(inv, dim)
        mask = voigt_mask(dim)
        df_dsigma = grads.compose(self.yield_fn.partials(inv, strength)) * mask
        dp_dsigma = grads.compose(self.potential.partials(inv, strength)) * mask
        return FlowGradients(df_dsigma=df_dsigma, dp_dsigma=dp_dsigma)

    def __repr__(self) -> str:
        return f"NonAssociatedFlow(yield_fn={self.yield_fn}, potential={self.potential})"
