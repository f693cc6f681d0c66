"""
ERC-721 call encoding and receipt decoding.
"""

from typing import Optional

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, keccak, to_hex

MINT_SIGNATURE = "mintNFT(address,string)"
TRANSFER_FROM_SIGNATURE = "transferFrom(address,address,uint256)"

TRANSFER_EVENT_TOPIC = to_hex(keccak(text="Transfer(address,address,uint256)"))


def encode_call(signature: str, arg_types: list[str], args: list) -> str:
    """Return 0x-prefixed calldata for a contract function call."""
    selector = function_signature_to_4byte_selector(signature)
    return to_hex(selector + encode(arg_types, args))


def encode_mint(recipient: str, token_uri: str) -> str:
    return encode_call(MINT_SIGNATURE, ["address", "string"], [recipient, token_uri])


def encode_transfer_from(from_address: str, to_address: str, token_id: int) -> str:
    return encode_call(
        TRANSFER_FROM_SIGNATURE,
        ["address", "address", "uint256"],
        [from_address, to_address, token_id],
    )


def extract_minted_token_id(receipt: dict, contract_address: str) -> Optional[int]:
    """
    Find the token id in a mint receipt.

    Looks for the ERC-721 Transfer event emitted by the contract; the
    token id is the third indexed topic.

    Returns:
        Token id, or None if the receipt has no matching event
    """
    contract = contract_address.lower()
    for log in receipt.get("logs") or []:
        topics = log.get("topics") or []
        if len(topics) != 4:
            continue
        if str(topics[0]).lower() != TRANSFER_EVENT_TOPIC:
            continue
        if str(log.get("address", "")).lower() != contract:
            continue
        return int(topics[3], 16)
    return None
