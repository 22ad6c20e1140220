# 文件: pympm/core/materials/plastic/return_mapping.py
"""
返回映射算法模块

提供塑性修正算法:
- MohrCoulombReturn: 弹性预测 / 塑性修正 (非关联 Mohr-Coulomb，带软化)

扩展指南:
    要添加新的返回映射算法，只需创建一个类实现:
    - apply(stress, dstrain, ep) -> StressResult
"""

import numpy as np

from ..constants import MULTIPLIER_DENOMINATOR_FLOOR
from ..interfaces import StressResult, mask_voigt
from .flow_rules import NonAssociatedFlow
from .invariants import compute_invariants


def _floored(denominator: float) -> float:
    """|x| 低于下限时以下限代替"""
    if abs(denominator) < MULTIPLIER_DENOMINATOR_FLOOR:
        return MULTIPLIER_DENOMINATOR_FLOOR
    return denominator


def equivalent_deviatoric_strain(dstrain: np.ndarray) -> float:
    """
    等效偏应变 √(2/3 e:e)

    Args:
        dstrain: 应变 Voigt 向量 (6,) (工程剪切)
    """
    e = np.asarray(dstrain, dtype=float).copy()
    e[:3] -= (e[0] + e[1] + e[2]) / 3.0
    e[3:] *= 0.5
    return float(np.sqrt(2.0 / 3.0 * (e[:3] @ e[:3] + 2.0 * (e[3:] @ e[3:]))))


class MohrCoulombReturn:
    """
    弹性预测 / 塑性修正

    状态: 弹性 / 屈服，由增量步开始时的应力判定。

    算法步骤:
    1. 软化律给出当前 φ, ψ, c 和软化模量 H
    2. 在当前应力 σ 上计算 F 与 ∂F/∂σ, ∂P/∂σ
       λ = (∂F/∂σ · D dε) / (∂F/∂σ · D ∂P/∂σ + H)，未屈服时 λ = 0
    3. 弹性试探应力 σ_tr = σ + D dε，在 σ_tr 上计算 F_tr 及梯度
       λ_tr = F_tr / (∂F/∂σ_tr · D ∂P/∂σ_tr + H)
    4. 乘子选择: 已屈服用 λ；试探屈服用 λ_tr；否则为 0
    5. σ_new = σ_tr - 乘子 · D ∂P/∂σ (流动方向取 σ 处)
    6. dε_p = dε - D⁻¹ (σ_new - σ)

    Attributes:
        elastic: 弹性模型 (需提供 D, C)
        flow: 流动法则 (需提供 yield_fn.evaluate, gradients)
        softening: 软化律 (需提供 get_strength, get_softening_modulus)
        dim: 维度

    Example:
        return_mapping = MohrCoulombReturn(elastic, flow, softening, dim=3)
        result = return_mapping.apply(stress, dstrain, ep=state.equivalent_plastic_strain)
    """

    def __init__(self, elastic, flow: NonAssociatedFlow, softening, dim: int = 3):
        self.elastic = elastic
        self.flow = flow
        self.softening = softening
        self.dim = dim

    def apply(self, stress: np.ndarray, dstrain: np.ndarray, ep: float = 0.0) -> StressResult:
        """
        执行一个增量步的返回映射

        Args:
            stress: 当前应力 (6,)
            dstrain: 应变增量 (6,) (工程剪切)
            ep: 累积等效塑性偏应变

        Returns:
            StressResult
        """
        dim = self.dim
        D = self.elastic.D
        stress = mask_voigt(stress, dim)
        dstrain = mask_voigt(dstrain, dim)

        strength = self.softening.get_strength(ep)
        H = self.softening.get_softening_modulus(ep)

        # 增量步开始时的状态
        inv = compute_invariants(stress, dim)
        f, yielded = self.flow.yield_fn.evaluate(inv, strength)
        grads = self.flow.gradients(inv, strength, dim)
        D_dp = D @ grads.dp_dsigma

        dstress_elastic = D @ dstrain
        multiplier = 0.0
        if yielded:
            multiplier = (grads.df_dsigma @ dstress_elastic) / _floored(grads.df_dsigma @ D_dp + H)

        # 弹性试探
        trial_stress = stress + dstress_elastic
        inv_trial = compute_invariants(trial_stress, dim)
        f_trial, yielded_trial = self.flow.yield_fn.evaluate(inv_trial, strength)
        if not yielded and yielded_trial:
            grads_trial = self.flow.gradients(inv_trial, strength, dim)
            multiplier = f_trial / _floored(
                grads_trial.df_dsigma @ (D @ grads_trial.dp_dsigma) + H
            )

        updated_stress = mask_voigt(trial_stress - multiplier * D_dp, dim)

        dpstrain = mask_voigt(dstrain - self.elastic.C @ (updated_stress - stress), dim)

        return StressResult(
            stress=updated_stress,
            plastic_strain=dpstrain,
            equivalent_plastic_strain=equivalent_deviatoric_strain(dpstrain),
            multiplier=float(multiplier),
            is_plastic=bool(yielded or yielded_trial),
            yield_value=f,
        )

    def __repr__(self) -> str:
        return (
            f"MohrCoulombReturn(elastic={self.elastic}, flow={self.flow}, "
            f"softening={self.softening}, dim={self.dim})"
        )
