# 文件: pympm/core/materials/properties.py
"""
材料参数解析

从属性字典 (参数名 -> 数值) 中读取材料参数。缺少必需参数时
只记录错误日志并以 0 代替，不中断调用方。
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple

import numpy as np

LOG = logging.getLogger(__name__)


def read_properties(
    material_id: Any,
    properties: Mapping[str, Any],
    keys: Iterable[str]
) -> Tuple[Dict[str, float], List[str]]:
    """
    读取必需参数

    Args:
        material_id: 材料编号 (用于日志)
        properties: 属性字典
        keys: 必需参数名

    Returns:
        values: 参数值字典 (缺失项为 0.0)
        missing: 缺失的参数名列表
    """
    values = {}
    missing = []
    for key in keys:
        try:
            values[key] = float(properties[key])
        except KeyError:
            missing.append(key)
            values[key] = 0.0

    if missing:
        LOG.error(
            "Material %s: missing required properties %s, defaulting to 0",
            material_id, ", ".join(missing)
        )
    return values, missing


@dataclass(frozen=True)
class ElasticProperties:
    """弹性参数 (所有模型共用)"""
    density: float = 0.0
    youngs_modulus: float = 0.0
    poisson_ratio: float = 0.0

    KEYS = ('density', 'youngs_modulus', 'poisson_ratio')


@dataclass(frozen=True)
class MohrCoulombProperties(ElasticProperties):
    """
    Mohr-Coulomb 参数

    角度在属性字典中以度给出，这里保存为弧度。
    """
    friction: float = 0.0
    dilation: float = 0.0
    cohesion: float = 0.0
    residual_friction: float = 0.0
    residual_dilation: float = 0.0
    residual_cohesion: float = 0.0
    peak_pdstrain: float = 0.0
    critical_pdstrain: float = 0.0
    tension_cutoff: float = 0.0
    porosity: float = 0.0

    KEYS = ElasticProperties.KEYS + (
        'friction', 'dilation', 'cohesion',
        'residual_friction', 'residual_dilation', 'residual_cohesion',
        'peak_pdstrain', 'critical_pdstrain',
        'tension_cutoff', 'porosity',
    )
    ANGLES = ('friction', 'dilation', 'residual_friction', 'residual_dilation')

    @classmethod
    def from_dict(cls, values: Dict[str, float]) -> 'MohrCoulombProperties':
        kwargs = dict(values)
        for key in cls.ANGLES:
            kwargs[key] = np.radians(kwargs[key])
        return cls(**kwargs)


@dataclass(frozen=True)
class BinghamProperties(ElasticProperties):
    """Bingham 粘塑性流体参数"""
    tau0: float = 0.0
    mu: float = 0.0
    critical_shear_rate: float = 0.0

    KEYS = ElasticProperties.KEYS + ('tau0', 'mu', 'critical_shear_rate')

    @classmethod
    def from_dict(cls, values: Dict[str, float]) -> 'BinghamProperties':
        return cls(**values)
