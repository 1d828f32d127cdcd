"""
Aptos signing message helpers.

The hash an Aptos account signs is the domain-separation prefix
``sha3_256("APTOS::RawTransaction")`` followed by the BCS bytes of the raw
transaction. These helpers let a client check that the hash handed out by
the backend really belongs to the raw transaction it will broadcast.
"""

import hashlib
import hmac

RAW_TRANSACTION_SALT = b"APTOS::RawTransaction"


def strip_hex_prefix(value: str) -> str:
    value = value.strip()
    if value[:2].lower() == "0x":
        return value[2:]
    return value


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string with or without the 0x prefix."""
    return bytes.fromhex(strip_hex_prefix(value))


def signing_message(raw_txn_hex: str) -> bytes:
    """Build the message an account signs for a raw transaction."""
    prefix = hashlib.sha3_256(RAW_TRANSACTION_SALT).digest()
    return prefix + hex_to_bytes(raw_txn_hex)


def matches_raw_transaction(hash_hex: str, raw_txn_hex: str) -> bool:
    """
    Check that a backend hash is the signing message of a raw transaction.

    Returns False for malformed hex instead of raising.
    """
    try:
        expected = signing_message(raw_txn_hex)
        actual = hex_to_bytes(hash_hex)
    except ValueError:
        return False
    return hmac.compare_digest(expected, actual)
