# 文件: pympm/core/materials/interfaces.py
"""
材料系统核心接口定义

设计原则:
1. Material: 所有本构模型的抽象基类，定义统一的 compute_stress 接口
2. StressResult: 标准化的返回映射结果
3. Protocol: 组件接口与粒子访问接口，使用鸭子类型实现松耦合

Voigt 约定 (全系统统一):
    [σxx, σyy, σzz, σxy, σyz, σzx]
    应力剪切分量为张量分量；应变 / 应变率剪切分量为工程分量 (因子 2)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable
import numpy as np


@dataclass
class StressResult:
    """
    返回映射结果

    Attributes:
        stress: 修正后的应力 Voigt 向量 (6,)
        plastic_strain: 塑性应变增量 (6,) (工程剪切)
        equivalent_plastic_strain: 等效塑性偏应变增量
        multiplier: 实际采用的塑性乘子
        is_plastic: 是否发生塑性修正
        yield_value: 增量步开始时的屈服函数值 F
    """
    stress: np.ndarray
    plastic_strain: np.ndarray
    equivalent_plastic_strain: float = 0.0
    multiplier: float = 0.0
    is_plastic: bool = False
    yield_value: float = 0.0


class Material(ABC):
    """
    本构模型抽象基类

    所有模型都必须实现:
    - compute_stress(): 核心应力更新方法
    - thermodynamic_pressure(): 由体积应变计算压力
    - create_state(): 创建粒子内变量 (无历史的模型返回 None)

    模型实例只保存材料参数和弹性张量，构造后只读；
    粒子状态由调用方持有并在每次调用时传入。

    Example:
        mat = MohrCoulombMaterial(0, props, dim=3)
        state = mat.create_state()
        stress = mat.compute_stress(stress, dstrain, particle, state)
    """

    def __init__(self, material_id: int, dim: int = 3):
        if dim not in (2, 3):
            raise ValueError(f"Dimension must be 2 or 3, got {dim}")
        self.id = material_id
        self.dim = dim

    @abstractmethod
    def compute_stress(
        self,
        stress: np.ndarray,
        dstrain: np.ndarray,
        particle: Optional['ParticleAccessor'] = None,
        state: Optional[object] = None
    ) -> np.ndarray:
        """
        计算更新后的应力

        Args:
            stress: 当前应力 Voigt 向量 (6,)
            dstrain: 应变增量 Voigt 向量 (6,) (工程剪切)
            particle: 粒子访问接口 (应变率、压力)
            state: 粒子内变量 (历史相关模型使用，原地更新)

        Returns:
            更新后的应力 (6,)
        """
        pass

    @abstractmethod
    def thermodynamic_pressure(self, volumetric_strain: float) -> float:
        """由体积应变计算热力学压力"""
        pass

    @abstractmethod
    def create_state(self) -> Optional[object]:
        """创建初始粒子内变量"""
        pass

    def dirac_delta(self) -> np.ndarray:
        """压力分解用的 Kronecker δ (随维度变化)"""
        return dirac_delta(self.dim)


# =============================================================================
# 组件协议 (Protocol for duck typing)
# =============================================================================

@runtime_checkable
class ElasticModel(Protocol):
    """
    弹性模型协议

    - mu / K: 剪切模量与体积模量
    - D / C: 弹性矩阵与柔度矩阵 (6,6)
    """

    @property
    def mu(self) -> float:
        ...

    @property
    def K(self) -> float:
        ...

    @property
    def D(self) -> np.ndarray:
        ...

    @property
    def C(self) -> np.ndarray:
        ...


@runtime_checkable
class SofteningLaw(Protocol):
    """
    软化律协议

    - get_strength(): 由累积等效塑性偏应变得到当前 φ, ψ, c
    - get_softening_modulus(): 软化模量 H
    """

    def get_strength(self, ep: float):
        ...

    def get_softening_modulus(self, ep: float) -> float:
        ...


@runtime_checkable
class ParticleAccessor(Protocol):
    """
    粒子访问协议 (外部协作者)

    本构模型只读取相 0 的应变率和压力。
    """

    def strain_rate(self, phase: int = 0) -> np.ndarray:
        ...

    def pressure(self, phase: int = 0) -> float:
        ...


# =============================================================================
# 辅助函数
# =============================================================================

_DELTA = {
    2: np.array([1.0, 1.0, 0.0, 0.0, 0.0, 0.0]),
    3: np.array([1.0, 1.0, 1.0, 0.0, 0.0, 0.0]),
}

_MASK = {
    2: np.array([1.0, 1.0, 1.0, 1.0, 0.0, 0.0]),
    3: np.ones(6),
}


def dirac_delta(dim: int) -> np.ndarray:
    """2D: [1,1,0,0,0,0]; 3D: [1,1,1,0,0,0]"""
    return _DELTA[dim].copy()


def voigt_mask(dim: int) -> np.ndarray:
    """
    维度掩码

    2D 时 σyz, σzx (第 5、6 分量) 不参与计算。
    """
    return _MASK[dim]


def mask_voigt(v: np.ndarray, dim: int) -> np.ndarray:
    """返回按维度掩码后的 Voigt 向量副本"""
    return np.asarray(v, dtype=float) * _MASK[dim]


def stress_to_tensor(s: np.ndarray) -> np.ndarray:
    """将应力 Voigt 向量转换为 3x3 张量 (应力不需要因子)"""
    return np.array([
        [s[0], s[3], s[5]],
        [s[3], s[1], s[4]],
        [s[5], s[4], s[2]]
    ])


def engineering_to_tensorial(v: np.ndarray) -> np.ndarray:
    """工程剪切 (γ) 转换为张量剪切 (γ/2)"""
    out = np.array(v, dtype=float)
    out[3:] *= 0.5
    return out


def property_summary(props: Dict[str, float]) -> Tuple[str, ...]:
    """按键名排序的 'key=value' 列表 (用于日志)"""
    return tuple(f"{k}={v:g}" for k, v in sorted(props.items()))
