"""Chain constants shared by providers and services."""

# Wrapped SOL mint; DexScreener and Jupiter key native SOL prices by it
NATIVE_MINT = "So11111111111111111111111111111111111111112"
NATIVE_SYMBOL = "SOL"

# Shared cache key namespace owned by MarketDataService
PRICE_KEY_PREFIX = "price:"
