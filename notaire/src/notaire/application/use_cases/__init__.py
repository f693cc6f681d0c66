"""Application use cases."""

from notaire.application.use_cases.get_transfer_history import GetTransferHistory
from notaire.application.use_cases.get_user import GetUser
from notaire.application.use_cases.issue_otp import IssueOtp
from notaire.application.use_cases.list_owned_assets import ListOwnedAssets
from notaire.application.use_cases.mint_asset import MintAsset
from notaire.application.use_cases.register_user import RegisterUser
from notaire.application.use_cases.transfer_asset import TransferAsset
from notaire.application.use_cases.verify_otp import VerifyOtp

__all__ = [
    "GetTransferHistory",
    "GetUser",
    "IssueOtp",
    "ListOwnedAssets",
    "MintAsset",
    "RegisterUser",
    "TransferAsset",
    "VerifyOtp",
]
