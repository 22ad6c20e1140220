# 文件: pympm/__init__.py
"""
PyMPM: 物质点法本构模型库
"""

__version__ = '0.1.0'
