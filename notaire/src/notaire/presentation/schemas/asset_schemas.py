"""
Asset and transfer API schemas.
"""

from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field

from notaire.application.dto.mint_dto import MintResult
from notaire.application.dto.transfer_dto import TransferResult
from notaire.domain.entities.asset import Asset
from notaire.domain.entities.transfer_record import TransferRecord
from notaire.domain.value_objects.anchor_outcome import AnchorOutcome


class AttributeSchema(BaseModel):
    """Metadata attribute supplied with a mint request."""

    trait_type: str = Field(..., min_length=1)
    value: Union[str, int, float]
    display_type: Optional[str] = None


class MintAssetPayload(BaseModel):
    """JSON part of the multipart mint request."""

    owner_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    external_url: Optional[str] = None
    attributes: List[AttributeSchema] = Field(default_factory=list)


class TransferAssetRequest(BaseModel):
    """Request to move an asset to another owner."""

    to_owner_id: str = Field(..., min_length=1)


class AnchorOutcomeSchema(BaseModel):
    """Outcome of one optional anchoring step."""

    status: str
    value: Optional[Any] = None
    reason: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: AnchorOutcome) -> "AnchorOutcomeSchema":
        data = outcome.to_dict()
        value = data.get("value")
        if is_dataclass(value):
            data["value"] = asdict(value)
        return cls(**data)


class AssetResponse(BaseModel):
    """Asset as stored in the ledger."""

    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    media_ref: str
    created_at: datetime
    chain_token_id: Optional[str] = None
    media_cid: Optional[str] = None
    metadata_cid: Optional[str] = None
    mint_tx_hash: Optional[str] = None

    @classmethod
    def from_entity(cls, asset: Asset) -> "AssetResponse":
        return cls(
            id=asset.id,
            name=asset.name,
            description=asset.description,
            owner_id=asset.owner_id,
            media_ref=asset.media_ref,
            created_at=asset.created_at,
            chain_token_id=asset.chain_token_id,
            media_cid=asset.media_cid,
            metadata_cid=asset.metadata_cid,
            mint_tx_hash=asset.mint_tx_hash,
        )


class MintAssetResponse(BaseModel):
    """Minted asset plus per-step anchoring outcome."""

    asset: AssetResponse
    provenance: dict[str, AnchorOutcomeSchema]
    gateway_url: Optional[str] = None

    @classmethod
    def from_result(cls, result: MintResult) -> "MintAssetResponse":
        return cls(
            asset=AssetResponse.from_entity(result.asset),
            provenance={
                step: AnchorOutcomeSchema.from_outcome(outcome)
                for step, outcome in (
                    ("media", result.provenance.media),
                    ("metadata", result.provenance.metadata),
                    ("chain", result.provenance.chain),
                )
            },
            gateway_url=result.gateway_url,
        )


class TransferRecordResponse(BaseModel):
    """One entry of an asset's transfer history."""

    id: str
    asset_id: str
    from_owner_id: str
    to_owner_id: str
    transferred_at: datetime
    tx_hash: Optional[str] = None
    asset_snapshot: Optional[dict] = None

    @classmethod
    def from_entity(cls, record: TransferRecord) -> "TransferRecordResponse":
        return cls(
            id=record.id,
            asset_id=record.asset_id,
            from_owner_id=record.from_owner_id,
            to_owner_id=record.to_owner_id,
            transferred_at=record.transferred_at,
            tx_hash=record.tx_hash,
            asset_snapshot=record.asset_snapshot,
        )


class TransferAssetResponse(BaseModel):
    """Recorded transfer plus on-chain outcome."""

    record: TransferRecordResponse
    chain: AnchorOutcomeSchema

    @classmethod
    def from_result(cls, result: TransferResult) -> "TransferAssetResponse":
        return cls(
            record=TransferRecordResponse.from_entity(result.record),
            chain=AnchorOutcomeSchema.from_outcome(result.chain),
        )
