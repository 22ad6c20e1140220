# 文件: pympm/core/materials/plastic/__init__.py
"""
塑性模型组件模块

提供塑性本构的核心组件:
- 应力不变量 (invariants): compute_invariants, StressInvariants
- 软化规律 (softening): LinearSoftening, StrengthParameters
- 屈服函数 (yield_functions): MohrCoulombYield
- 流动法则 (flow_rules): MenetreyWillamPotential, NonAssociatedFlow
- 返回映射 (return_mapping): MohrCoulombReturn
"""

from .invariants import StressInvariants, compute_invariants
from .softening import LinearSoftening, StrengthParameters
from .yield_functions import MohrCoulombYield
from .flow_rules import (
    FlowGradients,
    InvariantGradients,
    MenetreyWillamPotential,
    NonAssociatedFlow,
    invariant_gradients,
)
from .return_mapping import MohrCoulombReturn, equivalent_deviatoric_strain

__all__ = [
    # 应力不变量
    'StressInvariants',
    'compute_invariants',

    # 软化规律
    'LinearSoftening',
    'StrengthParameters',

    # 屈服函数
    'MohrCoulombYield',

    # 流动法则
    'FlowGradients',
    'InvariantGradients',
    'MenetreyWillamPotential',
    'NonAssociatedFlow',
    'invariant_gradients',

    # 返回映射
    'MohrCoulombReturn',
    'equivalent_deviatoric_strain',
]
