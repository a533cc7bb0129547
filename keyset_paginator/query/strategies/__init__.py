from .direction import DirectionStrategy, EffectiveDirection
from .keyset import KeysetStrategy
from .order_by import OrderByStrategy

__all__ = ['DirectionStrategy', 'EffectiveDirection', 'KeysetStrategy', 'OrderByStrategy']
