# 文件: pympm/core/materials/models/__init__.py
"""
预置材料模型

提供组装好的、可直接使用的材料模型:
- MohrCoulombMaterial: 非关联 Mohr-Coulomb 弹塑性材料 (带软化)
- BinghamMaterial: Bingham 粘塑性流体
"""

from .mohr_coulomb import MohrCoulombMaterial
from .bingham import BinghamMaterial

__all__ = ['MohrCoulombMaterial', 'BinghamMaterial']
