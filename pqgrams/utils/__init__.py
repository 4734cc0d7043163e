"""
Utility Module

Configuration loading and logging setup for entry points.
"""

from .config import DEFAULT_CONFIG, load_config, setup_logging

__all__ = [
    'DEFAULT_CONFIG',
    'load_config',
    'setup_logging',
]
