# 文件: pympm/core/materials/constants.py
"""
数值常量

本构计算中的分母下限和容差。所有截断都是静默的正常行为，
不会向调用方抛出异常。
"""

# 屈服判据: F > YIELD_TOLERANCE 视为屈服
YIELD_TOLERANCE = 1.0e-22

# J2 幂次除法的最小值 (dr/dJ2, dr/dJ3)
J2_TOLERANCE = 1.0e-22

# Lode 角比值 r 的截断范围 [-LODE_RATIO_LIMIT, LODE_RATIO_LIMIT]
LODE_RATIO_LIMIT = 0.99

# dθ/dr 中 (1 - r²) 非正时的替代值
LODE_RADICAND_FLOOR = 0.001

# Menetrey-Willam 双曲塑性势
HYPERBOLIC_ECCENTRICITY = 0.1       # ξ
MW_ECCENTRICITY_MIN = 0.5 + 1.0e-10  # e 的下限
MW_RADICAND_FLOOR = 1.0e-10          # √S 中 S 的下限
MW_DENOMINATOR_FLOOR = 1.0e-10       # 圆化函数分母 |m| 的下限
POTENTIAL_RADICAND_FLOOR = 1.0e-10   # √ω 中 ω 的下限

# 塑性乘子分母 |x| 的下限
MULTIPLIER_DENOMINATOR_FLOOR = 1.0e-15

# Bingham 临界剪切率下限
CRITICAL_SHEAR_RATE_FLOOR = 1.0e-15
