# 文件: pympm/core/materials/plastic/softening.py
"""
软化规律模块

提供:
- StrengthParameters: 当前强度参数 (φ, ψ, c)
- LinearSoftening: 峰值到残余值的分段线性软化

扩展指南:
    要添加新的软化模型，只需创建一个类实现以下方法:
    - get_strength(ep) -> StrengthParameters
    - get_softening_modulus(ep) -> float
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StrengthParameters:
    """
    当前强度参数 (每次调用由软化律导出)

    Attributes:
        friction: 内摩擦角 φ (弧度)
        dilation: 剪胀角 ψ (弧度)
        cohesion: 粘聚力 c
    """
    friction: float
    dilation: float
    cohesion: float


class LinearSoftening:
    """
    分段线性软化

    强度参数随累积等效塑性偏应变 ε_p 变化:
    - ε_p <= ε_peak:     峰值参数
    - ε_p >= ε_critical: 残余参数
    - 中间: x = x_r + (ε_p - ε_critical) / (ε_peak - ε_critical) * (x_peak - x_r)

    Example:
        softening = LinearSoftening(peak, residual, peak_pdstrain=0.0, critical_pdstrain=0.05)
        strength = softening.get_strength(ep=0.02)
    """

    def __init__(
        self,
        peak: StrengthParameters,
        residual: StrengthParameters,
        peak_pdstrain: float,
        critical_pdstrain: float
    ):
        """
        Args:
            peak: 峰值强度参数
            residual: 残余强度参数
            peak_pdstrain: 开始软化的等效塑性偏应变
            critical_pdstrain: 达到残余强度的等效塑性偏应变

        Raises:
            ValueError: peak_pdstrain > critical_pdstrain
        """
        if peak_pdstrain > critical_pdstrain:
            raise ValueError(
                f"peak_pdstrain ({peak_pdstrain}) must not exceed "
                f"critical_pdstrain ({critical_pdstrain})"
            )
        self.peak = peak
        self.residual = residual
        self.peak_pdstrain = float(peak_pdstrain)
        self.critical_pdstrain = float(critical_pdstrain)

    def get_strength(self, ep: float) -> StrengthParameters:
        """
        获取当前强度参数

        Args:
            ep: 累积等效塑性偏应变

        Returns:
            StrengthParameters
        """
        if ep <= self.peak_pdstrain:
            return self.peak
        if ep >= self.critical_pdstrain:
            return self.residual

        ratio = (ep - self.critical_pdstrain) / (self.peak_pdstrain - self.critical_pdstrain)
        peak, res = self.peak, self.residual
        return StrengthParameters(
            friction=res.friction + ratio * (peak.friction - res.friction),
            dilation=res.dilation + ratio * (peak.dilation - res.dilation),
            cohesion=res.cohesion + ratio * (peak.cohesion - res.cohesion),
        )

    def get_softening_modulus(self, ep: float) -> float:
        """
        软化模量 H

        塑性乘子分母中预留的软化反馈项，当前恒为 0:
        软化只通过下一增量步的 get_strength 生效。
        """
        return 0.0

    def __repr__(self) -> str:
        return (
            f"LinearSoftening(peak={self.peak}, residual={self.residual}, "
            f"ep=[{self.peak_pdstrain:.3e}, {self.critical_pdstrain:.3e}])"
        )
