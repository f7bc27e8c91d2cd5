"""
Input validation helpers.
"""

import re

EVM_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_wallet_address(address: str) -> bool:
    """True for an EVM address: ``0x`` followed by 40 hex characters."""
    if not address or not isinstance(address, str):
        return False
    return bool(EVM_ADDRESS_RE.match(address))
