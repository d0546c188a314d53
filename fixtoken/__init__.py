# fixtoken/__init__.py
"""
FixToken — a deterministic fungible-token ledger.
Balances, minting authority, linear vesting, delegations and a pause switch,
all held in one in-memory state and changed only through atomic transactions.
"""

__version__ = "0.1.0-dev"

from fixtoken.core.config import LedgerConfig
from fixtoken.core.errors import ErrorKind, LedgerError
from fixtoken.core.types import Result
from fixtoken.chain.ledger import Ledger
from fixtoken.verify.verifier import InvariantVerifier

__all__ = ["Ledger", "LedgerConfig", "Result", "ErrorKind", "LedgerError", "InvariantVerifier"]
