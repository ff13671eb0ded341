"""
Short code derivation strategies for the URL shortener.
Uses Strategy Pattern to allow different hash algorithms.

Every strategy is a pure function of the URL: the same URL always
derives the same code, so re-shortening resolves to the same entry.
"""

import hashlib
from abc import ABC, abstractmethod


class ShortCodeStrategy(ABC):
    """Abstract base class for short code derivation strategies"""
    
    def __init__(self, code_bytes: int = 6):
        if code_bytes < 1:
            raise ValueError(f"code_bytes must be positive, got {code_bytes}")
        self.code_bytes = code_bytes
    
    @property
    def code_length(self) -> int:
        """Length of the rendered code (two hex digits per byte)"""
        return self.code_bytes * 2
    
    def derive(self, original_url: str) -> str:
        """
        Derive the short code for a URL.
        
        Any string is accepted, including the empty string.
        
        Returns:
            Lowercase hex string of code_length characters
        """
        digest = self._digest(original_url.encode("utf-8"))
        return digest[:self.code_bytes].hex()
    
    @abstractmethod
    def _digest(self, data: bytes) -> bytes:
        """Return the full digest of the given bytes"""
        pass


class Sha3ShortCodeStrategy(ShortCodeStrategy):
    """
    SHA3-256 (Keccak) truncated to the first code_bytes bytes.
    
    48 bits with the default 6 bytes: negligible collision risk for
    realistic workloads, and uniform enough for domain aggregation.
    """
    
    def _digest(self, data: bytes) -> bytes:
        return hashlib.sha3_256(data).digest()


class Blake2bShortCodeStrategy(ShortCodeStrategy):
    """BLAKE2b-256 truncated to the first code_bytes bytes"""
    
    def _digest(self, data: bytes) -> bytes:
        return hashlib.blake2b(data, digest_size=32).digest()
