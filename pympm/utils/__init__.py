# 文件: pympm/utils/__init__.py
"""
工具模块
"""

from .config import load_config, save_config

__all__ = ['load_config', 'save_config']
