# 文件: pympm/core/materials/factory.py
"""
材料工厂模块

提供统一的材料创建入口 (按类型名注册)，以及从配置字典 / YAML 文件
批量创建材料。
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type

from .interfaces import Material
from .models.bingham import BinghamMaterial
from .models.mohr_coulomb import MohrCoulombMaterial
from ...utils.config import load_config

LOG = logging.getLogger(__name__)


class MaterialFactory:
    """
    材料工厂

    根据类型名和属性字典创建对应的材料对象。

    配置格式:
        dimension: 2
        materials:
          - id: 0
            type: MohrCoulomb
            density: 1800
            youngs_modulus: 1.0e6
            ...
          - id: 1
            type: Bingham
            ...

    Example:
        mat = MaterialFactory.create('MohrCoulomb', 0, props, dim=3)
        materials = MaterialFactory.from_yaml('materials.yaml')
    """

    _registry: Dict[str, Type[Material]] = {
        'MohrCoulomb': MohrCoulombMaterial,
        'Bingham': BinghamMaterial,
    }

    @classmethod
    def register(cls, name: str, material_cls: Type[Material]) -> None:
        """注册新的材料类型"""
        cls._registry[name] = material_cls

    @classmethod
    def types(cls):
        """已注册的类型名"""
        return sorted(cls._registry)

    @classmethod
    def create(
        cls,
        material_type: str,
        material_id: int,
        properties: Mapping[str, Any],
        dim: int = 3
    ) -> Material:
        """
        根据类型名创建材料

        Args:
            material_type: 类型名 ('MohrCoulomb', 'Bingham', ...)
            material_id: 材料编号
            properties: 属性字典
            dim: 维度

        Returns:
            Material: 材料对象

        Raises:
            ValueError: 未知材料类型
        """
        try:
            material_cls = cls._registry[material_type]
        except KeyError:
            raise ValueError(
                f"Unknown material type '{material_type}' for material {material_id}. "
                f"Available: {', '.join(cls.types())}"
            ) from None
        return material_cls(material_id, properties, dim)

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        dim: Optional[int] = None
    ) -> Dict[int, Material]:
        """
        从配置字典批量创建材料

        Args:
            config: 配置字典 (见类文档)
            dim: 维度，None 时取 config['dimension'] (默认 3)

        Returns:
            {材料编号: 材料对象}

        Raises:
            ValueError: 配置缺少 'materials' 或条目缺少 'id' / 'type'
        """
        entries = config.get('materials')
        if entries is None:
            raise ValueError("Configuration has no 'materials' section")
        if dim is None:
            dim = int(config.get('dimension', 3))

        materials = {}
        for entry in entries:
            props = dict(entry)
            material_id = props.pop('id', None)
            material_type = props.pop('type', None)
            if material_id is None or material_type is None:
                raise ValueError(f"Material entry needs 'id' and 'type': {entry}")
            if material_id in materials:
                LOG.warning("Material %s defined twice, keeping the last one", material_id)
            materials[material_id] = cls.create(material_type, material_id, props, dim)

        LOG.info("Created %d materials (%dD)", len(materials), dim)
        return materials

    @classmethod
    def from_yaml(cls, path: str, dim: Optional[int] = None) -> Dict[int, Material]:
        """从 YAML 文件批量创建材料"""
        return cls.from_config(load_config(path), dim)
