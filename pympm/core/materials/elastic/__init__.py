# 文件: pympm/core/materials/elastic/__init__.py
"""
弹性模型模块

提供弹性响应模型:
- IsotropicElastic: 各向同性线弹性
"""

from .isotropic import IsotropicElastic

__all__ = ['IsotropicElastic']
