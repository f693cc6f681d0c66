"""
Mint Data Transfer Objects.
"""

from dataclasses import dataclass
from typing import Optional

from notaire.domain.entities.asset import Asset
from notaire.domain.value_objects.anchor_outcome import AnchorOutcome


@dataclass(frozen=True)
class MetadataAttribute:
    """One entry of the metadata document's attributes list."""

    trait_type: str
    value: str | int | float
    display_type: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"trait_type": self.trait_type, "value": self.value}
        if self.display_type:
            data["display_type"] = self.display_type
        return data


@dataclass(frozen=True)
class MintProvenance:
    """Outcome of each optional anchoring step of a mint."""

    media: AnchorOutcome
    metadata: AnchorOutcome
    chain: AnchorOutcome

    def to_dict(self) -> dict:
        return {
            "media": self.media.to_dict(),
            "metadata": self.metadata.to_dict(),
            "chain": self.chain.to_dict(),
        }


@dataclass
class MintResult:
    """Minted asset plus what was anchored externally."""

    asset: Asset
    provenance: MintProvenance
    gateway_url: Optional[str] = None
