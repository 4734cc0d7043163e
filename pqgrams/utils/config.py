"""
設定檔載入

JSON 設定檔會覆蓋 DEFAULT_CONFIG 中的對應欄位，未指定的欄位保留預設值。
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pqgrams.similarity.pqgram import validate_configuration

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'pqgram': {
        'p': 2,
        'q': 3,
    },
    'cache': {
        'enabled': True,
        'maxsize': 128,
    },
    'parallel': {
        'n_workers': None,
        'show_progress': True,
    },
    'logging': {
        'level': 'INFO',
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    載入配置文件

    Args:
        config_path: 配置文件路徑（None = 只使用預設值）

    Returns:
        配置字典

    Raises:
        FileNotFoundError: 配置文件不存在
        InvalidConfiguration: pqgram.p 或 pqgram.q 不合法
    """
    if config_path is None:
        config = copy.deepcopy(DEFAULT_CONFIG)
    else:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config = _merge(DEFAULT_CONFIG, json.load(f))
        logger.info("Loaded config from %s", config_file)

    validate_configuration(config['pqgram']['p'], config['pqgram']['q'])
    return config


def setup_logging(level: Union[str, int] = 'INFO'):
    """Configure root logging for command-line entry points."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
