"""Errors raised by the store and cache layers.

A missing record is not an error: lookups and deletes return ``None``.
"""
from typing import Optional


class BitcoinServiceError(Exception):
    """Base exception for the bitcoin service."""

    def __init__(self, message: str, code: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class StoreError(BitcoinServiceError):
    """Relational store query or exec failed. Always surfaced to the caller."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(
            f"Database error during {operation}: {cause}",
            "STORE_ERROR",
            {"operation": operation, "error_type": type(cause).__name__},
        )
        self.operation = operation
        self.cause = cause


class CacheBackendError(BitcoinServiceError):
    """Cache get/set/delete failed. Never surfaced past the cache service."""

    def __init__(self, operation: str, key: Optional[str], cause: Exception) -> None:
        super().__init__(
            f"Cache {operation} failed for key {key}: {cause}",
            "CACHE_ERROR",
            {"operation": operation, "key": key},
        )
        self.operation = operation
        self.key = key
        self.cause = cause
