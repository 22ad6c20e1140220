# 文件: pympm/utils/config.py
"""
YAML 配置读写
"""

from typing import Any, Dict

import yaml


def load_config(path: str) -> Dict[str, Any]:
    with open(path) as f:
        return yaml.safe_load(f)


def save_config(config: Dict[str, Any], path: str) -> None:
    with open(path, 'w') as f:
        yaml.dump(config, f)
