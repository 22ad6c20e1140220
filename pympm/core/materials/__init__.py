# 文件: pympm/core/materials/__init__.py
"""
PyMPM 材料系统

分层架构:
- interfaces.py: 抽象基类、协议和 Voigt 辅助函数
- constants.py: 数值截断常量
- properties.py: 材料参数解析
- state.py: 粒子内变量管理
- elastic/: 弹性模型组件
- plastic/: 塑性模型组件 (不变量、软化、屈服函数、流动法则、返回映射)
- models/: 预置材料模型
- factory.py: 材料工厂

使用方法:
    from pympm.core.materials import MaterialFactory, MaterialPoint

    # 创建材料
    mat = MaterialFactory.create('MohrCoulomb', 0, {
        'density': 1800, 'youngs_modulus': 1e6, 'poisson_ratio': 0.3,
        'friction': 30, 'dilation': 10, 'cohesion': 5, ...
    }, dim=3)

    # 创建状态
    state = mat.create_state()

    # 计算应力 (state 原地累加塑性应变)
    stress = mat.compute_stress(stress, dstrain, particle, state)

扩展指南:
    添加新软化律:
        1. 在 plastic/softening.py 添加新类
        2. 实现 get_strength() 和 get_softening_modulus() 方法

    添加新材料模型:
        1. 在 models/ 目录添加新文件
        2. 继承 Material 基类，实现 compute_stress()、thermodynamic_pressure() 和 create_state()
        3. MaterialFactory.register('Name', NewMaterial)
"""

# 核心接口
from .interfaces import (
    Material,
    StressResult,
    ElasticModel,
    SofteningLaw,
    ParticleAccessor,
    dirac_delta,
    voigt_mask,
    mask_voigt,
    stress_to_tensor,
    engineering_to_tensorial,
)

# 参数
from .properties import (
    BinghamProperties,
    ElasticProperties,
    MohrCoulombProperties,
    read_properties,
)

# 状态管理
from .state import MaterialPoint, PlasticState

# 弹性组件
from .elastic import IsotropicElastic

# 塑性组件
from .plastic import (
    StressInvariants,
    compute_invariants,
    LinearSoftening,
    StrengthParameters,
    MohrCoulombYield,
    FlowGradients,
    MenetreyWillamPotential,
    NonAssociatedFlow,
    invariant_gradients,
    MohrCoulombReturn,
)

# 预置模型
from .models import BinghamMaterial, MohrCoulombMaterial

# 工厂
from .factory import MaterialFactory


__all__ = [
    # 核心接口
    'Material',
    'StressResult',
    'ElasticModel',
    'SofteningLaw',
    'ParticleAccessor',

    # 辅助函数
    'dirac_delta',
    'voigt_mask',
    'mask_voigt',
    'stress_to_tensor',
    'engineering_to_tensorial',

    # 参数
    'BinghamProperties',
    'ElasticProperties',
    'MohrCoulombProperties',
    'read_properties',

    # 状态
    'MaterialPoint',
    'PlasticState',

    # 弹性组件
    'IsotropicElastic',

    # 塑性组件
    'StressInvariants',
    'compute_invariants',
    'LinearSoftening',
    'StrengthParameters',
    'MohrCoulombYield',
    'FlowGradients',
    'MenetreyWillamPotential',
    'NonAssociatedFlow',
    'invariant_gradients',
    'MohrCoulombReturn',

    # 预置模型
    'BinghamMaterial',
    'MohrCoulombMaterial',

    # 工厂
    'MaterialFactory',
]
