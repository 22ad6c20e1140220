# 文件: pympm/core/materials/models/bingham.py
"""
Bingham 粘塑性流体模型

σ = -p δ + τ，偏应力 τ 由正则化的表观粘度和 von Mises 截断给出。
压力由粒子的热力学状态提供。
"""

import logging
from typing import Any, Mapping, Optional

import numpy as np

from ..constants import CRITICAL_SHEAR_RATE_FLOOR
from ..interfaces import (
    Material, ParticleAccessor, engineering_to_tensorial, mask_voigt, property_summary
)
from ..properties import BinghamProperties, read_properties
from ..elastic.isotropic import IsotropicElastic

LOG = logging.getLogger(__name__)

PHASE = 0


class BinghamMaterial(Material):
    """
    Bingham 粘塑性材料

    状态: 低于临界剪切率 (不流动) / 高于临界剪切率 (流动)

    算法步骤:
    1. 读取粒子应变率，剪切分量减半 (工程 -> 张量)
    2. γ̇ = √(2 (D:D + 剪切分量平方和))
    3. γ̇² > γ̇_c² 时 η = 2 (τ0 / γ̇ + μ)，否则 η = 0
    4. τ = η D
    5. 0.5 (τ1² + τ2² + τ3²) < τ0² 时 τ = 0
    6. σ = -p δ + τ

    必需属性:
        density, youngs_modulus, poisson_ratio, tau0, mu, critical_shear_rate

    Example:
        mat = BinghamMaterial(1, props, dim=2)
        stress = mat.compute_stress(stress, dstrain, particle)
    """

    def __init__(self, material_id: int, properties: Mapping[str, Any], dim: int = 3):
        super().__init__(material_id, dim)

        values, self.missing_properties = read_properties(
            material_id, properties, BinghamProperties.KEYS
        )
        self.properties = BinghamProperties.from_dict(values)
        self.elastic = IsotropicElastic(
            self.properties.youngs_modulus, self.properties.poisson_ratio
        )

        LOG.info(
            "Material %s: Bingham (%dD) %s",
            material_id, dim, " ".join(property_summary(values))
        )

    @property
    def K(self) -> float:
        """体积模量"""
        return self.elastic.K

    def create_state(self) -> None:
        """Bingham 流体无历史变量"""
        return None

    def thermodynamic_pressure(self, volumetric_strain: float) -> float:
        """p = -K ε_v"""
        return -self.elastic.K * volumetric_strain

    @staticmethod
    def shear_rate(strain_rate: np.ndarray) -> float:
        """
        剪切率 γ̇

        Args:
            strain_rate: 张量形式的应变率 (6,)

        Voigt 记号下剪切分量在双点积中计两次。
        """
        shear = strain_rate[3:]
        return float(np.sqrt(2.0 * (strain_rate @ strain_rate + shear @ shear)))

    def apparent_viscosity(self, shear_rate: float) -> float:
        """
        表观粘度 η

        低于临界剪切率时为 0。
        """
        critical = max(self.properties.critical_shear_rate, CRITICAL_SHEAR_RATE_FLOOR)
        if shear_rate * shear_rate > critical * critical:
            return 2.0 * (self.properties.tau0 / shear_rate + self.properties.mu)
        return 0.0

    def yield_cap(self, tau: np.ndarray) -> np.ndarray:
        """
        von Mises 截断

        只用前三个分量计算 0.5 τ:τ，低于 τ0² 时偏应力置零。
        """
        trace_invariant2 = 0.5 * float(tau[:3] @ tau[:3])
        if trace_invariant2 < self.properties.tau0 ** 2:
            return np.zeros(6)
        return tau

    def deviatoric_stress(self, strain_rate: np.ndarray) -> np.ndarray:
        """
        偏应力 τ

        Args:
            strain_rate: 粒子应变率 (6,) (工程剪切，2D 时忽略第 5、6 分量)
        """
        rate = engineering_to_tensorial(mask_voigt(strain_rate, self.dim))
        eta = self.apparent_viscosity(self.shear_rate(rate))
        return self.yield_cap(eta * rate)

    def compute_stress(
        self,
        stress: np.ndarray,
        dstrain: np.ndarray,
        particle: Optional[ParticleAccessor] = None,
        state: Optional[object] = None
    ) -> np.ndarray:
        """
        计算更新后的应力

        当前应力和应变增量不参与计算，应变率与压力取自粒子 (相 0)。
        """
        if particle is None:
            raise ValueError("Bingham material requires a particle accessor")
        tau = self.deviatoric_stress(particle.strain_rate(PHASE))
        return -particle.pressure(PHASE) * self.dirac_delta() + tau

    def __repr__(self) -> str:
        p = self.properties
        return (
            f"BinghamMaterial(id={self.id}, dim={self.dim}, "
            f"τ0={p.tau0:.2e}, μ={p.mu:.2e}, γ̇_c={p.critical_shear_rate:.2e})"
        )
