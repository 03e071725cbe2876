"""
Infra Builder Utils Module

- logger: Logging setup and configuration
- names: Provider-safe resource naming
- typing_compat: Type compatibility utilities

Usage:
    from infrabuilder.utils import setup_logger, limit_name, override
"""

from .logger import setup_logger, parse_module_levels, normalize_module_name
from .names import dashed, limit_name, short_hash
from .typing_compat import override

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'normalize_module_name',
    'dashed',
    'limit_name',
    'short_hash',
    'override',
]
