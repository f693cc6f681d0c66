"""
Asset API routes.

Provides endpoints for the asset ledger:
- POST /assets - Mint asset (multipart: payload JSON + image)
- POST /assets/{asset_id}/transfer - Transfer to another owner
- GET /assets/{asset_id}/transfers - Asset transfer history
"""

from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import ValidationError as PydanticValidationError

from notaire.application.dto.mint_dto import MetadataAttribute
from notaire.application.use_cases.get_transfer_history import GetTransferHistory
from notaire.application.use_cases.mint_asset import MintAsset
from notaire.application.use_cases.transfer_asset import TransferAsset
from notaire.di.dependencies import (
    get_get_transfer_history,
    get_mint_asset,
    get_transfer_asset,
)
from notaire.domain.exceptions import ValidationError
from notaire.presentation.schemas.asset_schemas import (
    MintAssetPayload,
    MintAssetResponse,
    TransferAssetRequest,
    TransferAssetResponse,
    TransferRecordResponse,
)

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.post(
    "",
    response_model=MintAssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mint asset",
)
async def mint_asset(
    payload: str = Form(..., description="MintAssetPayload as JSON"),
    image: UploadFile = File(...),
    use_case: MintAsset = Depends(get_mint_asset),
) -> MintAssetResponse:
    """
    Mint a new asset for an existing owner.

    The asset is recorded even when IPFS or the chain are down; the
    provenance block reports which optional steps were skipped and why.

    Raises:
        422 if payload is malformed, name is empty or image is empty
        404 if owner does not exist
        500 if media or ledger write fails
    """
    try:
        request = MintAssetPayload.model_validate_json(payload)
    except PydanticValidationError as e:
        raise ValidationError(field="payload", reason=str(e))

    media = await image.read()

    result = await use_case.execute(
        owner_id=request.owner_id,
        name=request.name,
        media=media,
        description=request.description,
        external_url=request.external_url,
        attributes=[
            MetadataAttribute(
                trait_type=attribute.trait_type,
                value=attribute.value,
                display_type=attribute.display_type,
            )
            for attribute in request.attributes
        ],
    )
    return MintAssetResponse.from_result(result)


@router.post(
    "/{asset_id}/transfer",
    response_model=TransferAssetResponse,
    summary="Transfer asset",
)
async def transfer_asset(
    asset_id: str,
    request: TransferAssetRequest,
    use_case: TransferAsset = Depends(get_transfer_asset),
) -> TransferAssetResponse:
    """
    Transfer asset to another owner.

    Raises:
        404 if asset or destination owner does not exist
        409 if a concurrent transfer changed the owner first
    """
    result = await use_case.execute(asset_id, request.to_owner_id)
    return TransferAssetResponse.from_result(result)


@router.get(
    "/{asset_id}/transfers",
    response_model=List[TransferRecordResponse],
    summary="Asset transfer history",
)
async def list_asset_transfers(
    asset_id: str,
    use_case: GetTransferHistory = Depends(get_get_transfer_history),
) -> List[TransferRecordResponse]:
    records = await use_case.execute(asset_id=asset_id)
    return [TransferRecordResponse.from_entity(record) for record in records]
