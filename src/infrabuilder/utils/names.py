"""
Naming helpers for provider resources
"""

import base64
import hashlib

from .. import constants


def dashed(name: str) -> str:
    """Replace dots with dashes, for providers that reject dots in names."""
    return name.replace('.', '-')


def short_hash(value: str, length: int = constants.ELB_NAME_HASH_LENGTH) -> str:
    """
    Stable lowercase base32 digest of `value`, cut to `length` characters
    """
    digest = hashlib.sha1(value.encode('utf-8')).digest()
    return base64.b32encode(digest).decode('ascii').lower()[:length]


def limit_name(name: str, max_length: int, hash_length: int = constants.ELB_NAME_HASH_LENGTH) -> str:
    """
    Shorten `name` to at most `max_length` characters.

    Names that already fit are returned unchanged. Longer names are truncated
    and suffixed with '-<hash>' of the full name, so two long names sharing a
    prefix still map to different results.
    """
    if len(name) <= max_length:
        return name
    suffix = short_hash(name, hash_length)
    return f"{name[:max_length - len(suffix) - 1]}-{suffix}"
