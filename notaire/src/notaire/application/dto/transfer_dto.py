"""
Transfer Data Transfer Objects.
"""

from dataclasses import dataclass

from notaire.domain.entities.transfer_record import TransferRecord
from notaire.domain.value_objects.anchor_outcome import AnchorOutcome


@dataclass
class TransferResult:
    """Recorded transfer plus the on-chain outcome."""

    record: TransferRecord
    chain: AnchorOutcome

    @property
    def tx_hash(self):
        return self.record.tx_hash
