# 文件: pympm/core/materials/elastic/isotropic.py
"""
各向同性弹性模型

提供:
- IsotropicElastic: 由 K, G 组装的各向同性弹性张量及其柔度矩阵
"""

import numpy as np


class IsotropicElastic:
    """
    各向同性线弹性模型 (Hooke's Law)

    本构关系: dσ = D : dε

    弹性矩阵 D 为 6x6 矩阵，使用 Voigt 记号:
    [σxx, σyy, σzz, σxy, σyz, σzx]^T = D @ [εxx, εyy, εzz, γxy, γyz, γzx]^T

    Attributes:
        E: 杨氏模量
        nu: 泊松比
        mu: 剪切模量 G = E / (2(1+ν))
        K: 体积模量 K = E / (3(1-2ν))
        D: 弹性矩阵 (6,6)
        C: 柔度矩阵 (6,6)

    Example:
        elastic = IsotropicElastic(E=1e6, nu=0.3)
        dstress = elastic.D @ dstrain
    """

    def __init__(self, E: float, nu: float):
        """
        Args:
            E: 杨氏模量 (Young's modulus)
            nu: 泊松比 (Poisson's ratio), 需满足 -1 < ν < 0.5

        Raises:
            ValueError: 当泊松比超出有效范围时
        """
        if not (-1.0 < nu < 0.5):
            raise ValueError(f"Poisson's ratio must be in (-1, 0.5), got {nu}")

        self.E = float(E)
        self.nu = float(nu)

        self._mu = self.E / (2 * (1 + self.nu))
        self._K = self.E / (3 * (1 - 2 * self.nu))

        self._D = self._build_D_matrix()
        # 伪逆: E = 0 (参数缺失) 时得到零矩阵而非奇异错误
        self._C = np.linalg.pinv(self._D)

    @property
    def mu(self) -> float:
        """剪切模量 G"""
        return self._mu

    @property
    def K(self) -> float:
        """体积模量 K"""
        return self._K

    @property
    def D(self) -> np.ndarray:
        """弹性矩阵 (6,6)"""
        return self._D

    @property
    def C(self) -> np.ndarray:
        """柔度矩阵 D⁻¹ (6,6)"""
        return self._C

    def _build_D_matrix(self) -> np.ndarray:
        """
        构建 6x6 弹性矩阵

        | K+4G/3  K-2G/3  K-2G/3  0  0  0 |
        | K-2G/3  K+4G/3  K-2G/3  0  0  0 |
        | K-2G/3  K-2G/3  K+4G/3  0  0  0 |
        |    0       0       0    G  0  0 |
        |    0       0       0    0  G  0 |
        |    0       0       0    0  0  G |
        """
        K, G = self._K, self._mu
        a1 = K + (4.0 / 3.0) * G
        a2 = K - (2.0 / 3.0) * G

        D = np.zeros((6, 6))
        D[:3, :3] = a2
        D[0, 0] = D[1, 1] = D[2, 2] = a1
        D[3, 3] = D[4, 4] = D[5, 5] = G
        return D

    def __repr__(self) -> str:
        return f"IsotropicElastic(E={self.E:.2e}, nu={self.nu:.3f})"
