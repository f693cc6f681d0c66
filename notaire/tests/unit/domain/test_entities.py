"""
Unit tests for domain entities.

Usage:
    pytest notaire/tests/unit/domain/test_entities.py
"""

import re
from datetime import datetime, timedelta

import pytest

from notaire.domain.entities import Asset, TransferRecord, User, generate_owner_id


class TestUser:
    """Unit tests for User entity."""

    def test_create_user(self):
        user = User(name="Asha", verification_id="123456789012", phone="9876543210")

        assert user.id
        assert isinstance(user.created_at, datetime)
        assert user.created_at.utcoffset() == timedelta(0)
        assert user.owner_id is None

    def test_name_required(self):
        with pytest.raises(ValueError):
            User(name="   ")

    def test_owner_id_format(self):
        assert re.fullmatch(r"OWN-[0-9A-F]{8}", generate_owner_id())

    def test_owner_ids_differ(self):
        assert generate_owner_id() != generate_owner_id()


class TestAsset:
    """Unit tests for Asset entity."""

    def test_create_off_chain_asset(self):
        asset = Asset(name="Deed", owner_id="u1", media_ref="/media/a.jpg")

        assert asset.id
        assert not asset.is_on_chain
        assert asset.media_cid is None
        assert asset.metadata_cid is None
        assert asset.mint_tx_hash is None

    def test_on_chain_when_token_present(self):
        asset = Asset(
            name="Deed",
            owner_id="u1",
            media_ref="/media/a.jpg",
            chain_token_id=str(2**256 - 1),
        )
        assert asset.is_on_chain

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "", "owner_id": "u1", "media_ref": "m"},
            {"name": "Deed", "owner_id": "", "media_ref": "m"},
            {"name": "Deed", "owner_id": "u1", "media_ref": ""},
        ],
    )
    def test_required_fields(self, kwargs):
        with pytest.raises(ValueError):
            Asset(**kwargs)

    def test_to_dict_is_json_ready(self):
        asset = Asset(name="Deed", owner_id="u1", media_ref="m")
        data = asset.to_dict()

        assert data["owner_id"] == "u1"
        assert isinstance(data["created_at"], str)


class TestTransferRecord:
    """Unit tests for TransferRecord entity."""

    def test_create_record(self):
        record = TransferRecord(asset_id="a1", from_owner_id="u1", to_owner_id="u2")

        assert record.id
        assert record.tx_hash is None
        assert record.to_dict()["to_owner_id"] == "u2"

    def test_timestamps_are_utc(self):
        record = TransferRecord(asset_id="a1", from_owner_id="u1", to_owner_id="u2")
        asset = Asset(name="Deed", owner_id="u1", media_ref="/media/a.jpg")

        assert record.transferred_at.utcoffset() == timedelta(0)
        assert asset.created_at.utcoffset() == timedelta(0)
        assert record.to_dict()["transferred_at"].endswith("+00:00")

    def test_requires_both_owners(self):
        with pytest.raises(ValueError):
            TransferRecord(asset_id="a1", from_owner_id="u1", to_owner_id="")

    def test_requires_asset(self):
        with pytest.raises(ValueError):
            TransferRecord(asset_id="", from_owner_id="u1", to_owner_id="u2")
