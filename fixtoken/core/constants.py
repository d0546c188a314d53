# fixtoken/core/constants.py
"""Fixed token metadata and numeric bounds."""

TOKEN_NAME = "FixToken"
TOKEN_SYMBOL = "FIX"
TOKEN_DECIMALS = 6

MAX_SUPPLY = 10 ** 15
MAX_METADATA_LEN = 256

# Defaults for a freshly deployed ledger
DEFAULT_ADMIN = "deployer"
DEFAULT_START_BLOCK = 100
