"""
Domain service interfaces for Notaire.
"""

from notaire.domain.services.i_chain_client import IChainClient, MintReceipt
from notaire.domain.services.i_content_storage import IContentStorage
from notaire.domain.services.i_media_store import IMediaStore
from notaire.domain.services.i_notifier import DeliveryReport, INotifier
from notaire.domain.services.i_otp_store import IOtpStore, OtpVerificationStatus

__all__ = [
    "IChainClient",
    "MintReceipt",
    "IContentStorage",
    "IMediaStore",
    "DeliveryReport",
    "INotifier",
    "IOtpStore",
    "OtpVerificationStatus",
]
