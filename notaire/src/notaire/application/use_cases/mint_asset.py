"""
Mint Asset use case.

Creates an asset for an existing owner. Raw media and the ledger row
are mandatory; content storage and chain anchoring are best-effort
enhancements to provenance.
"""

import json
from typing import Optional, Sequence

from notaire.application.anchoring import run_optional_step, skip
from notaire.application.dto.mint_dto import (
    MetadataAttribute,
    MintProvenance,
    MintResult,
)
from notaire.domain.entities.asset import Asset, generate_asset_id
from notaire.domain.exceptions import (
    LedgerWriteFailedError,
    OwnerNotFoundError,
    ValidationError,
)
from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.domain.services.i_chain_client import IChainClient
from notaire.domain.services.i_content_storage import IContentStorage
from notaire.domain.services.i_media_store import IMediaStore
from notaire.domain.value_objects.anchor_outcome import (
    AnchorOutcome,
    Anchored,
    SkipReason,
)
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import mints_total

logger = get_logger(__name__)


class MintAsset:
    """
    Mint a new asset.

    Business rules:
    - Owner must exist
    - Name and media must be non-empty
    - Media is always written to primary storage first
    - Metadata is uploaded only if the media upload succeeded
    - Chain mint happens only if the metadata upload succeeded, a
      chain client is configured and the owner's address resolves
    - Only the media write and the ledger write can fail the mint
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        asset_repository: IAssetRepository,
        media_store: IMediaStore,
        chain_identities: IChainIdentityRegistry,
        content_storage: Optional[IContentStorage] = None,
        chain_client: Optional[IChainClient] = None,
        storage_timeout: float = 15.0,
        chain_timeout: float = 90.0,
    ):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Identity store
            asset_repository: Asset ledger
            media_store: Primary media storage
            chain_identities: User to chain address registry
            content_storage: Content-addressable storage (None if disabled)
            chain_client: Chain client (None if disabled)
            storage_timeout: Bound for each content upload in seconds
            chain_timeout: Bound for the mint transaction in seconds
        """
        self.user_repository = user_repository
        self.asset_repository = asset_repository
        self.media_store = media_store
        self.chain_identities = chain_identities
        self.content_storage = content_storage
        self.chain_client = chain_client
        self.storage_timeout = storage_timeout
        self.chain_timeout = chain_timeout

    async def execute(
        self,
        owner_id: str,
        name: str,
        media: bytes,
        description: Optional[str] = None,
        external_url: Optional[str] = None,
        attributes: Sequence[MetadataAttribute] = (),
    ) -> MintResult:
        """
        Execute mint.

        Args:
            owner_id: User receiving the asset
            name: Asset name
            media: Raw media bytes
            description: Optional description
            external_url: Optional link stored in the metadata document
            attributes: Optional metadata attributes

        Returns:
            MintResult with persisted asset, per-step provenance and
            gateway URL of the media when it was uploaded

        Raises:
            ValidationError: If name or media is empty
            OwnerNotFoundError: If owner does not exist
            StorageWriteFailedError: If media cannot be stored
            LedgerWriteFailedError: If the asset row cannot be written
        """
        # 1. Validate input
        if not name or not name.strip():
            raise ValidationError(field="name", reason="Asset name is required")
        if not media:
            raise ValidationError(field="media", reason="Media must not be empty")

        # 2. Owner must exist
        if not await self.user_repository.exists(owner_id):
            raise OwnerNotFoundError(owner_id)

        # 3. Persist raw media (mandatory)
        asset_id = generate_asset_id()
        media_ref = await self.media_store.save(asset_id, media)

        # 4. Optional anchoring
        media_outcome = await self._upload_media(asset_id, media)
        metadata_outcome = await self._upload_metadata(
            asset_id,
            media_outcome,
            name=name,
            description=description,
            external_url=external_url,
            attributes=attributes,
        )
        chain_outcome = await self._mint_on_chain(owner_id, metadata_outcome)

        media_cid = media_outcome.value_or_none()
        receipt = chain_outcome.value_or_none()

        # 5. Persist asset (mandatory)
        asset = Asset(
            id=asset_id,
            name=name.strip(),
            description=description,
            media_ref=media_ref,
            owner_id=owner_id,
            media_cid=media_cid,
            metadata_cid=metadata_outcome.value_or_none(),
            chain_token_id=receipt.token_id if receipt else None,
            mint_tx_hash=receipt.tx_hash if receipt else None,
        )

        try:
            asset = await self.asset_repository.create(asset)
        except LedgerWriteFailedError:
            mints_total.labels(status="failed").inc()
            logger.error(
                f"Ledger write failed for asset {asset_id}; media left at "
                f"{media_ref}, chain tx {asset.mint_tx_hash}"
            )
            raise

        mints_total.labels(status="success").inc()
        logger.info(
            f"Minted asset {asset.id} for {owner_id} "
            f"(media_cid={asset.media_cid}, token={asset.chain_token_id})"
        )

        # 6. Result
        return MintResult(
            asset=asset,
            provenance=MintProvenance(
                media=media_outcome,
                metadata=metadata_outcome,
                chain=chain_outcome,
            ),
            gateway_url=(
                self.content_storage.gateway_url(media_cid)
                if self.content_storage and media_cid
                else None
            ),
        )

    async def _upload_media(self, asset_id: str, media: bytes) -> AnchorOutcome:
        if self.content_storage is None:
            return skip("media_upload", SkipReason.NOT_CONFIGURED)

        storage = self.content_storage
        return await run_optional_step(
            "media_upload",
            lambda: storage.put(media, filename=f"{asset_id}.jpg"),
            self.storage_timeout,
        )

    async def _upload_metadata(
        self,
        asset_id: str,
        media_outcome: AnchorOutcome,
        name: str,
        description: Optional[str],
        external_url: Optional[str],
        attributes: Sequence[MetadataAttribute],
    ) -> AnchorOutcome:
        if self.content_storage is None:
            return skip("metadata_upload", SkipReason.NOT_CONFIGURED)
        if not isinstance(media_outcome, Anchored):
            return skip("metadata_upload", SkipReason.UPSTREAM_SKIPPED)

        document = build_metadata_document(
            name=name,
            description=description,
            image_uri=IContentStorage.content_uri(media_outcome.value),
            external_url=external_url,
            attributes=attributes,
        )
        payload = json.dumps(document).encode("utf-8")

        storage = self.content_storage
        return await run_optional_step(
            "metadata_upload",
            lambda: storage.put(payload, filename=f"{asset_id}.json"),
            self.storage_timeout,
        )

    async def _mint_on_chain(
        self, owner_id: str, metadata_outcome: AnchorOutcome
    ) -> AnchorOutcome:
        if self.chain_client is None:
            return skip("chain_mint", SkipReason.NOT_CONFIGURED)
        if not isinstance(metadata_outcome, Anchored):
            return skip("chain_mint", SkipReason.UPSTREAM_SKIPPED)

        recipient = await self.chain_identities.resolve(owner_id)
        if recipient is None:
            return skip(
                "chain_mint",
                SkipReason.IDENTITY_UNRESOLVED,
                f"no chain address for {owner_id}",
            )

        token_uri = IContentStorage.content_uri(metadata_outcome.value)
        client = self.chain_client
        return await run_optional_step(
            "chain_mint",
            lambda: client.mint(recipient, token_uri),
            self.chain_timeout,
        )


def build_metadata_document(
    name: str,
    description: Optional[str],
    image_uri: str,
    external_url: Optional[str] = None,
    attributes: Sequence[MetadataAttribute] = (),
) -> dict:
    """Build an ERC-721 style metadata document."""
    document = {
        "name": name,
        "description": description or "",
        "image": image_uri,
    }
    if external_url:
        document["external_url"] = external_url
    if attributes:
        document["attributes"] = [attribute.to_dict() for attribute in attributes]
    return document
