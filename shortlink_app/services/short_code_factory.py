"""
Factory for creating short code derivation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    Sha3ShortCodeStrategy,
    Blake2bShortCodeStrategy
)
from shortlink_app.config import settings


class ShortCodeStrategyType(Enum):
    """Available short code derivation strategies"""
    SHA3_256 = "sha3_256"
    BLAKE2B = "blake2b"


class ShortCodeFactory:
    """Factory for creating short code derivation strategies with caching"""
    
    _instances: Dict[Tuple[ShortCodeStrategyType, int], ShortCodeStrategy] = {}
    
    @classmethod
    def create_strategy(
        cls,
        strategy_type: Optional[ShortCodeStrategyType] = None,
        code_bytes: Optional[int] = None
    ) -> ShortCodeStrategy:
        """
        Create or return cached short code derivation strategy.
        
        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.
            code_bytes: Digest bytes kept in the code.
                        If None, uses value from settings.
        
        Returns:
            A cached instance of a ShortCodeStrategy
        
        Raises:
            ValueError: If strategy_type is unknown
        """
        if strategy_type is None:
            strategy_type = ShortCodeStrategyType(settings.short_code_strategy)
        if code_bytes is None:
            code_bytes = settings.short_code_bytes
        
        key = (strategy_type, code_bytes)
        if key in cls._instances:
            return cls._instances[key]
        
        if strategy_type == ShortCodeStrategyType.SHA3_256:
            instance = Sha3ShortCodeStrategy(code_bytes=code_bytes)
        elif strategy_type == ShortCodeStrategyType.BLAKE2B:
            instance = Blake2bShortCodeStrategy(code_bytes=code_bytes)
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")
        
        cls._instances[key] = instance
        return instance
