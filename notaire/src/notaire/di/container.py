"""
Dependency Injection Container for Notaire.

Manages all service instances and their dependencies.
"""

from typing import Optional

from notaire.application.use_cases.get_transfer_history import GetTransferHistory
from notaire.application.use_cases.get_user import GetUser
from notaire.application.use_cases.issue_otp import IssueOtp
from notaire.application.use_cases.list_owned_assets import ListOwnedAssets
from notaire.application.use_cases.mint_asset import MintAsset
from notaire.application.use_cases.register_user import RegisterUser
from notaire.application.use_cases.transfer_asset import TransferAsset
from notaire.application.use_cases.verify_otp import VerifyOtp
from notaire.config.settings import get_settings
from notaire.domain.exceptions import ContentStorageUnavailableError, RpcError
from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.repositories.i_transfer_repository import ITransferRepository
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.domain.services.i_chain_client import IChainClient
from notaire.domain.services.i_content_storage import IContentStorage
from notaire.domain.services.i_media_store import IMediaStore
from notaire.domain.services.i_notifier import INotifier
from notaire.domain.services.i_otp_store import IOtpStore
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.infrastructure.blockchain.evm_chain_client import EvmChainClient
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.notifications.logging_notifier import LoggingNotifier
from notaire.infrastructure.notifications.twilio_sms_notifier import (
    TwilioSmsNotifier,
)
from notaire.infrastructure.otp.in_memory_otp_store import InMemoryOtpStore
from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.repositories.asset_repository import (
    AssetRepository,
)
from notaire.infrastructure.persistence.repositories.chain_identity_registry import (  # noqa: E501
    ChainIdentityRegistry,
)
from notaire.infrastructure.persistence.repositories.transfer_repository import (
    TransferRepository,
)
from notaire.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from notaire.infrastructure.resilience.circuit_breaker import CircuitBreaker
from notaire.infrastructure.storage.ipfs_content_storage import IpfsContentStorage
from notaire.infrastructure.storage.local_media_store import LocalMediaStore

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of all services and repositories.
    Optional backends (IPFS, chain) resolve to None when not configured.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Infrastructure
        self._database: Optional[Database] = None
        self._media_store: Optional[IMediaStore] = None

        # Optional backends
        self._content_storage: Optional[IContentStorage] = None
        self._content_storage_resolved = False
        self._chain_client: Optional[IChainClient] = None
        self._chain_client_resolved = False

        # OTP gate
        self._notifier: Optional[INotifier] = None
        self._otp_store: Optional[IOtpStore] = None

        # Repositories
        self._user_repository: Optional[IUserRepository] = None
        self._asset_repository: Optional[IAssetRepository] = None
        self._transfer_repository: Optional[ITransferRepository] = None
        self._chain_identities: Optional[IChainIdentityRegistry] = None

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        settings = get_settings()

        await self.database.connect()
        if settings.DATABASE_CREATE_SCHEMA:
            await self.database.create_schema()

        logger.info(
            "Backends: "
            f"ipfs={'on' if self.content_storage else 'off'}, "
            f"chain={'on' if self.chain_client else 'off'}, "
            f"sms={'twilio' if settings.twilio_enabled else 'log-only'}"
        )

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._content_storage:
            await self._content_storage.close()

        if self._chain_client:
            await self._chain_client.close()

        if self._notifier:
            await self._notifier.close()

        if self._database:
            await self._database.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=get_settings().DATABASE_URL,
                echo=get_settings().DATABASE_ECHO,
            )
        return self._database

    @property
    def media_store(self) -> IMediaStore:
        """Get local media store instance."""
        if self._media_store is None:
            self._media_store = LocalMediaStore(base_path=get_settings().STORAGE_PATH)
        return self._media_store

    # Optional Backend Getters

    @property
    def content_storage(self) -> Optional[IContentStorage]:
        """Get IPFS content storage, or None when disabled."""
        if not self._content_storage_resolved:
            settings = get_settings()
            if settings.IPFS_ENABLED:
                self._content_storage = IpfsContentStorage(
                    api_url=settings.IPFS_API_URL,
                    gateway_url=settings.IPFS_GATEWAY_URL,
                    timeout=settings.IPFS_TIMEOUT,
                    circuit_breaker=self._circuit_breaker(
                        "ipfs", ContentStorageUnavailableError
                    ),
                )
            self._content_storage_resolved = True
        return self._content_storage

    @property
    def chain_client(self) -> Optional[IChainClient]:
        """Get EVM chain client, or None when chain settings are missing."""
        if not self._chain_client_resolved:
            settings = get_settings()
            if settings.chain_enabled:
                self._chain_client = EvmChainClient(
                    rpc_url=settings.CHAIN_RPC_URL,
                    contract_address=ChainAddress(settings.NFT_CONTRACT_ADDRESS),
                    operator_address=ChainAddress(settings.CHAIN_OPERATOR_ADDRESS),
                    rpc_timeout=settings.CHAIN_RPC_TIMEOUT,
                    receipt_timeout=settings.CHAIN_RECEIPT_TIMEOUT,
                    poll_interval=settings.CHAIN_RECEIPT_POLL_INTERVAL,
                    gas_limit=settings.CHAIN_GAS_LIMIT,
                    circuit_breaker=self._circuit_breaker("chain", RpcError),
                )
            self._chain_client_resolved = True
        return self._chain_client

    @property
    def notifier(self) -> INotifier:
        """Get SMS notifier (Twilio when configured, log-only otherwise)."""
        if self._notifier is None:
            settings = get_settings()
            if settings.twilio_enabled:
                self._notifier = TwilioSmsNotifier(
                    account_sid=settings.TWILIO_ACCOUNT_SID,
                    auth_token=settings.TWILIO_AUTH_TOKEN,
                    from_number=settings.TWILIO_FROM_NUMBER,
                    api_url=settings.TWILIO_API_URL,
                    default_country_code=settings.DEFAULT_COUNTRY_CODE,
                    timeout=settings.TWILIO_TIMEOUT,
                )
            else:
                self._notifier = LoggingNotifier()
        return self._notifier

    @property
    def otp_store(self) -> IOtpStore:
        """Get OTP store instance (process-wide)."""
        if self._otp_store is None:
            settings = get_settings()
            self._otp_store = InMemoryOtpStore(
                code_length=settings.OTP_LENGTH,
                ttl_seconds=settings.OTP_TTL_SECONDS,
            )
        return self._otp_store

    # Repository Getters

    @property
    def user_repository(self) -> IUserRepository:
        if self._user_repository is None:
            self._user_repository = UserRepository(self.database)
        return self._user_repository

    @property
    def asset_repository(self) -> IAssetRepository:
        if self._asset_repository is None:
            self._asset_repository = AssetRepository(self.database)
        return self._asset_repository

    @property
    def transfer_repository(self) -> ITransferRepository:
        if self._transfer_repository is None:
            self._transfer_repository = TransferRepository(self.database)
        return self._transfer_repository

    @property
    def chain_identities(self) -> IChainIdentityRegistry:
        """Get chain identity registry, with operator fallback if enabled."""
        if self._chain_identities is None:
            settings = get_settings()
            fallback = None
            if (
                settings.CHAIN_IDENTITY_FALLBACK_TO_OPERATOR
                and settings.CHAIN_OPERATOR_ADDRESS
            ):
                fallback = ChainAddress(settings.CHAIN_OPERATOR_ADDRESS)
            self._chain_identities = ChainIdentityRegistry(
                self.database,
                fallback_address=fallback,
            )
        return self._chain_identities

    # Use Case Getters

    def get_register_user(self) -> RegisterUser:
        return RegisterUser(
            user_repository=self.user_repository,
            chain_identities=self.chain_identities,
        )

    def get_get_user(self) -> GetUser:
        return GetUser(user_repository=self.user_repository)

    def get_mint_asset(self) -> MintAsset:
        """Get mint use case wired to whichever backends are configured."""
        settings = get_settings()
        return MintAsset(
            user_repository=self.user_repository,
            asset_repository=self.asset_repository,
            media_store=self.media_store,
            chain_identities=self.chain_identities,
            content_storage=self.content_storage,
            chain_client=self.chain_client,
            storage_timeout=settings.IPFS_TIMEOUT,
            chain_timeout=self._chain_step_timeout(),
        )

    def get_transfer_asset(self) -> TransferAsset:
        return TransferAsset(
            user_repository=self.user_repository,
            asset_repository=self.asset_repository,
            transfer_repository=self.transfer_repository,
            chain_identities=self.chain_identities,
            chain_client=self.chain_client,
            chain_timeout=self._chain_step_timeout(),
        )

    def get_list_owned_assets(self) -> ListOwnedAssets:
        return ListOwnedAssets(
            user_repository=self.user_repository,
            asset_repository=self.asset_repository,
        )

    def get_get_transfer_history(self) -> GetTransferHistory:
        return GetTransferHistory(
            user_repository=self.user_repository,
            asset_repository=self.asset_repository,
            transfer_repository=self.transfer_repository,
        )

    def get_issue_otp(self) -> IssueOtp:
        settings = get_settings()
        return IssueOtp(
            user_repository=self.user_repository,
            otp_store=self.otp_store,
            notifier=self.notifier,
            app_name=settings.APP_NAME,
            ttl_seconds=settings.OTP_TTL_SECONDS,
            notification_timeout=settings.TWILIO_TIMEOUT,
            log_code_on_failure=settings.OTP_LOG_CODE_ON_FAILURE,
        )

    def get_verify_otp(self) -> VerifyOtp:
        return VerifyOtp(
            user_repository=self.user_repository,
            otp_store=self.otp_store,
        )

    # Helpers

    def _circuit_breaker(
        self, name: str, expected_exception: type[Exception]
    ) -> CircuitBreaker:
        settings = get_settings()
        return CircuitBreaker(
            name=name,
            failure_threshold=settings.CB_FAILURE_THRESHOLD,
            success_threshold=settings.CB_SUCCESS_THRESHOLD,
            recovery_timeout=settings.CB_TIMEOUT_SECONDS,
            expected_exception=expected_exception,
        )

    def _chain_step_timeout(self) -> float:
        # send + receipt wait + a final RPC round trip
        settings = get_settings()
        return settings.CHAIN_RECEIPT_TIMEOUT + 2 * settings.CHAIN_RPC_TIMEOUT


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()


def reset_container() -> None:
    """Drop the global container (for testing)."""
    global _container
    _container = None
