# fixtoken/core/config.py
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from fixtoken.core.constants import DEFAULT_ADMIN, DEFAULT_START_BLOCK


@dataclass(frozen=True)
class LedgerConfig:
    """
    Deployment parameters for a fresh ledger.
    The admin is always registered as a minter; extra_minters are added on top.
    """
    admin: str = DEFAULT_ADMIN
    start_block: int = DEFAULT_START_BLOCK
    extra_minters: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.admin:
            raise ValueError("admin account must be non-empty")
        if isinstance(self.start_block, bool) or not isinstance(self.start_block, int):
            raise ValueError(f"start_block must be an integer, got {self.start_block!r}")
        if self.start_block < 0:
            raise ValueError("start_block must be >= 0")

    @classmethod
    def from_env(cls, admin: Optional[str] = None, start_block: Optional[int] = None) -> "LedgerConfig":
        """Resolve settings in this order:
        1. explicit arguments
        2. FIXTOKEN_ADMIN / FIXTOKEN_START_BLOCK environment variables
        3. defaults
        """
        if admin is None:
            admin = os.environ.get("FIXTOKEN_ADMIN") or DEFAULT_ADMIN

        if start_block is None:
            env_block = os.environ.get("FIXTOKEN_START_BLOCK")
            if env_block:
                try:
                    start_block = int(env_block)
                except ValueError:
                    raise ValueError(f"FIXTOKEN_START_BLOCK is not an integer: {env_block!r}")
            else:
                start_block = DEFAULT_START_BLOCK

        return cls(admin=admin, start_block=start_block)
