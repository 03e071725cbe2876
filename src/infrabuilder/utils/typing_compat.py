from typing_extensions import override

__all__ = ['override']
