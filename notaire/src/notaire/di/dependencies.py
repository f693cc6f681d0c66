"""
FastAPI dependency providers.

Route handlers receive use cases through Depends, so tests can swap
them with app.dependency_overrides.
"""

from notaire.application.use_cases.get_transfer_history import GetTransferHistory
from notaire.application.use_cases.get_user import GetUser
from notaire.application.use_cases.issue_otp import IssueOtp
from notaire.application.use_cases.list_owned_assets import ListOwnedAssets
from notaire.application.use_cases.mint_asset import MintAsset
from notaire.application.use_cases.register_user import RegisterUser
from notaire.application.use_cases.transfer_asset import TransferAsset
from notaire.application.use_cases.verify_otp import VerifyOtp
from notaire.di.container import get_container
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)

# ================================================================
# Service Dependencies
# ================================================================


def get_chain_identities() -> IChainIdentityRegistry:
    """Get chain identity registry dependency."""
    return get_container().chain_identities


# ================================================================
# Use Case Dependencies
# ================================================================


def get_register_user() -> RegisterUser:
    """Get RegisterUser use case dependency."""
    return get_container().get_register_user()


def get_get_user() -> GetUser:
    """Get GetUser use case dependency."""
    return get_container().get_get_user()


def get_mint_asset() -> MintAsset:
    """Get MintAsset use case dependency."""
    return get_container().get_mint_asset()


def get_transfer_asset() -> TransferAsset:
    """Get TransferAsset use case dependency."""
    return get_container().get_transfer_asset()


def get_list_owned_assets() -> ListOwnedAssets:
    """Get ListOwnedAssets use case dependency."""
    return get_container().get_list_owned_assets()


def get_get_transfer_history() -> GetTransferHistory:
    """Get GetTransferHistory use case dependency."""
    return get_container().get_get_transfer_history()


def get_issue_otp() -> IssueOtp:
    """Get IssueOtp use case dependency."""
    return get_container().get_issue_otp()


def get_verify_otp() -> VerifyOtp:
    """Get VerifyOtp use case dependency."""
    return get_container().get_verify_otp()
