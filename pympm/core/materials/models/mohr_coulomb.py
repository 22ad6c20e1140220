# 文件: pympm/core/materials/models/mohr_coulomb.py
"""
Mohr-Coulomb 弹塑性材料模型

使用组合模式将弹性模型、屈服函数、塑性势、软化律和返回映射算法组合成完整的材料。
"""

import logging
from typing import Any, Mapping, Optional

import numpy as np

from ..interfaces import Material, ParticleAccessor, StressResult, property_summary
from ..properties import MohrCoulombProperties, read_properties
from ..state import PlasticState
from ..elastic.isotropic import IsotropicElastic
from ..plastic.flow_rules import MenetreyWillamPotential, NonAssociatedFlow
from ..plastic.return_mapping import MohrCoulombReturn
from ..plastic.softening import LinearSoftening, StrengthParameters
from ..plastic.yield_functions import MohrCoulombYield

LOG = logging.getLogger(__name__)


class MohrCoulombMaterial(Material):
    """
    非关联 Mohr-Coulomb 弹塑性材料 (组合式实现)

    将各组件组合成完整的材料模型:
    - 弹性: IsotropicElastic
    - 屈服: MohrCoulombYield (φ)
    - 塑性势: MenetreyWillamPotential (ψ)
    - 软化: LinearSoftening
    - 返回映射: MohrCoulombReturn

    必需属性 (角度单位为度):
        density, youngs_modulus, poisson_ratio,
        friction, dilation, cohesion,
        residual_friction, residual_dilation, residual_cohesion,
        peak_pdstrain, critical_pdstrain, tension_cutoff, porosity

    Example:
        mat = MohrCoulombMaterial(0, props, dim=3)
        state = mat.create_state()
        stress = mat.compute_stress(stress, dstrain, particle, state)
    """

    def __init__(self, material_id: int, properties: Mapping[str, Any], dim: int = 3):
        """
        Args:
            material_id: 材料编号
            properties: 属性字典，缺失的参数记录错误并取 0
            dim: 维度 (2 或 3)
        """
        super().__init__(material_id, dim)

        values, self.missing_properties = read_properties(
            material_id, properties, MohrCoulombProperties.KEYS
        )
        self.properties = MohrCoulombProperties.from_dict(values)
        props = self.properties

        self.elastic = IsotropicElastic(props.youngs_modulus, props.poisson_ratio)
        self.yield_fn = MohrCoulombYield()
        self.potential = MenetreyWillamPotential()
        self.flow = NonAssociatedFlow(self.yield_fn, self.potential)
        peak_pdstrain, critical_pdstrain = self._softening_thresholds()
        self.softening = LinearSoftening(
            peak=StrengthParameters(props.friction, props.dilation, props.cohesion),
            residual=StrengthParameters(
                props.residual_friction, props.residual_dilation, props.residual_cohesion
            ),
            peak_pdstrain=peak_pdstrain,
            critical_pdstrain=critical_pdstrain,
        )
        self.return_mapping = MohrCoulombReturn(
            self.elastic, self.flow, self.softening, dim
        )

        LOG.info(
            "Material %s: MohrCoulomb (%dD) %s",
            material_id, dim, " ".join(property_summary(values))
        )

    def _softening_thresholds(self):
        """
        软化阈值 (peak, critical)

        缺失的阈值取另一个阈值的值 (阶跃软化)，不做顺序检查；
        两个阈值都给定时顺序错误仍由 LinearSoftening 抛出 ValueError。
        """
        peak = self.properties.peak_pdstrain
        critical = self.properties.critical_pdstrain
        missing = self.missing_properties
        if 'critical_pdstrain' in missing and 'peak_pdstrain' not in missing:
            critical = peak
        elif 'peak_pdstrain' in missing and 'critical_pdstrain' not in missing:
            peak = critical
        else:
            return peak, critical
        LOG.error(
            "Material %s: softening thresholds incomplete, using step softening at %g",
            self.id, peak
        )
        return peak, critical

    @property
    def mu(self) -> float:
        """剪切模量"""
        return self.elastic.mu

    @property
    def K(self) -> float:
        """体积模量"""
        return self.elastic.K

    @property
    def D(self) -> np.ndarray:
        """弹性矩阵"""
        return self.elastic.D

    def create_state(self) -> PlasticState:
        """创建初始材料状态"""
        return PlasticState()

    def thermodynamic_pressure(self, volumetric_strain: float) -> float:
        """p = -K ε_v"""
        return -self.elastic.K * volumetric_strain

    def update(
        self,
        stress: np.ndarray,
        dstrain: np.ndarray,
        state: Optional[PlasticState] = None
    ) -> StressResult:
        """
        返回映射并把塑性应变累加到状态

        Args:
            stress: 当前应力 (6,)
            dstrain: 应变增量 (6,)
            state: 粒子内变量 (原地更新；None 时不保存)

        Returns:
            StressResult
        """
        if state is None:
            state = self.create_state()

        result = self.return_mapping.apply(
            np.asarray(stress, dtype=float),
            np.asarray(dstrain, dtype=float),
            state.equivalent_plastic_strain
        )
        state.accumulate(result.plastic_strain, result.equivalent_plastic_strain)
        return result

    def compute_stress(
        self,
        stress: np.ndarray,
        dstrain: np.ndarray,
        particle: Optional[ParticleAccessor] = None,
        state: Optional[PlasticState] = None
    ) -> np.ndarray:
        """
        计算更新后的应力

        粒子访问接口在本模型中不使用。
        """
        return self.update(stress, dstrain, state).stress

    def __repr__(self) -> str:
        p = self.properties
        return (
            f"MohrCoulombMaterial(id={self.id}, dim={self.dim}, "
            f"E={p.youngs_modulus:.2e}, nu={p.poisson_ratio:.3f}, "
            f"φ={np.degrees(p.friction):.1f}°, c={p.cohesion:.2e})"
        )
