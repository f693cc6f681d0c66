"""
ChainAddress value object - 20-byte account address on an EVM chain.
"""

from dataclasses import dataclass

from eth_utils import is_address, to_checksum_address


@dataclass(frozen=True)
class ChainAddress:
    """
    Value object representing a hex encoded 20-byte chain address.

    Stored in checksummed form so equal addresses compare equal
    regardless of input casing.
    """

    value: str

    def __post_init__(self):
        """Validate and checksum address on creation."""
        if not self.value:
            raise ValueError("Chain address is required")

        if not is_address(self.value):
            raise ValueError(f"Invalid chain address: {self.value}")

        object.__setattr__(self, "value", to_checksum_address(self.value))

    def __str__(self) -> str:
        return self.value
