"""Fixed-point protocol constants."""

# Ledger unit of account has 18 decimals.
PRECISION = 10**18

# Feeds answer with 8 decimals; scale up to 18.
FEED_DECIMALS = 8
ADDITIONAL_FEED_PRECISION = 10**10

# 50% of collateral value counts toward solvency (200% overcollateralized).
LIQUIDATION_THRESHOLD = 50
LIQUIDATION_PRECISION = 100

# 10% of the seized collateral is paid to the liquidator as incentive.
LIQUIDATION_BONUS = 10

MIN_HEALTH_FACTOR = 1 * PRECISION

# Upper bound on every health factor. Accounts without debt sit on it; any
# computed factor is clamped to it so no indebted account can compare higher.
MAX_HEALTH_FACTOR = 2**256 - 1

# Oldest acceptable price reading, in seconds.
TIMEOUT = 3 * 60 * 60
