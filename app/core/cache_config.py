"""Cache key layout and invalidation rules"""

# Default time-to-live in seconds for every bitcoin cache entry
DEFAULT_CACHE_TTL = 60 * 60  # 1 hour

# Cache key patterns
CACHE_KEYS = {
    "bitcoin": "bitcoin:{}",
    "rankings": "bitcoin:rankings",
}

# Keys to delete when data changes. "{}" is replaced with the symbol.
INVALIDATION_KEYS = {
    "bitcoin_write": [
        "bitcoin:rankings",
    ],
    "bitcoin_delete": [
        "bitcoin:{}",
        "bitcoin:rankings",
    ],
}

def bitcoin_key(symbol: str) -> str:
    return CACHE_KEYS["bitcoin"].format(symbol)

def invalidation_keys(event: str, symbol: str) -> list:
    return [key.format(symbol) for key in INVALIDATION_KEYS[event]]
