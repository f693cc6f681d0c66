"""
User API routes.

Provides endpoints for owner management:
- POST /users - Register new owner
- GET /users/{user_id} - Get owner by ID
- GET /users/{user_id}/assets - List assets currently owned
- GET /users/{user_id}/transfers - Transfers sent or received
- PUT /users/{user_id}/chain-identity - Bind chain account
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from notaire.application.use_cases.get_transfer_history import GetTransferHistory
from notaire.application.use_cases.get_user import GetUser
from notaire.application.use_cases.list_owned_assets import (
    MAX_PAGE_SIZE,
    ListOwnedAssets,
)
from notaire.application.use_cases.register_user import RegisterUser
from notaire.di.dependencies import (
    get_chain_identities,
    get_get_transfer_history,
    get_get_user,
    get_list_owned_assets,
    get_register_user,
)
from notaire.domain.exceptions import ValidationError
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.presentation.schemas.asset_schemas import (
    AssetResponse,
    TransferRecordResponse,
)
from notaire.presentation.schemas.user_schemas import (
    ChainIdentityResponse,
    CreateUserRequest,
    LinkChainIdentityRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register owner",
)
async def create_user(
    request: CreateUserRequest,
    use_case: RegisterUser = Depends(get_register_user),
) -> UserResponse:
    """
    Register a new owner.

    Raises:
        422 if verification number, phone or chain address is malformed
        409 if the verification number is already registered
    """
    user = await use_case.execute(
        name=request.name,
        verification_id=request.verification_id,
        phone=request.phone,
        email=request.email,
        chain_address=request.chain_address,
    )
    return UserResponse.from_entity(user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get owner")
async def get_user(
    user_id: str,
    use_case: GetUser = Depends(get_get_user),
) -> UserResponse:
    user = await use_case.execute(user_id)
    return UserResponse.from_entity(user)


@router.get(
    "/{user_id}/assets",
    response_model=List[AssetResponse],
    summary="List owned assets",
)
async def list_user_assets(
    user_id: str,
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    use_case: ListOwnedAssets = Depends(get_list_owned_assets),
) -> List[AssetResponse]:
    assets = await use_case.execute(user_id, limit=limit, offset=offset)
    return [AssetResponse.from_entity(asset) for asset in assets]


@router.get(
    "/{user_id}/transfers",
    response_model=List[TransferRecordResponse],
    summary="Owner transfer history",
)
async def list_user_transfers(
    user_id: str,
    use_case: GetTransferHistory = Depends(get_get_transfer_history),
) -> List[TransferRecordResponse]:
    """Transfers where the owner was sender or recipient, newest first."""
    records = await use_case.execute(owner_id=user_id)
    return [TransferRecordResponse.from_entity(record) for record in records]


@router.put(
    "/{user_id}/chain-identity",
    response_model=ChainIdentityResponse,
    summary="Bind chain account",
)
async def link_chain_identity(
    user_id: str,
    request: LinkChainIdentityRequest,
    get_user: GetUser = Depends(get_get_user),
    chain_identities: IChainIdentityRegistry = Depends(get_chain_identities),
) -> ChainIdentityResponse:
    """Bind (or rebind) the chain account that receives minted tokens."""
    user = await get_user.execute(user_id)

    try:
        address = ChainAddress(request.address)
    except ValueError as e:
        raise ValidationError(field="address", reason=str(e))

    await chain_identities.link(user.id, address)
    return ChainIdentityResponse(user_id=user.id, address=address.value)
