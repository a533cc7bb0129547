from .base_repo import KeysetRepository

__all__ = ['KeysetRepository']
