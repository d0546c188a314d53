# fixtoken/core/canon.py
import hashlib
from typing import Any

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")

def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Two equal ledger snapshots always yield the same bytes.
    """
    return jcs.canonicalize(obj)


def state_digest(obj: Any) -> str:
    """hex(sha256) over the canonical form."""
    return hashlib.sha256(canonical_json(obj)).hexdigest()
