# 文件: pympm/core/__init__.py
"""
PyMPM 核心模块

导出本构模型、状态管理和材料工厂
"""

from .materials import (
    # 核心接口
    Material,
    StressResult,
    ParticleAccessor,

    # 状态
    PlasticState,
    MaterialPoint,

    # 工厂
    MaterialFactory,

    # 预置模型
    MohrCoulombMaterial,
    BinghamMaterial,
)


__all__ = [
    'Material',
    'StressResult',
    'ParticleAccessor',
    'PlasticState',
    'MaterialPoint',
    'MaterialFactory',
    'MohrCoulombMaterial',
    'BinghamMaterial',
]
