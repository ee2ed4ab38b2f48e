"""
Transaction Codec - deterministic binary serialization of transactions.

Produces the exact byte layout steemd hashes when verifying signatures:

    [chain id] ref_block_num:u16 ref_block_prefix:u32 expiration:u32
    varint(len(operations)) operation* varint(len(extensions)) extension*

The chain id is only prepended for the signing digest; the wire form omits it.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Union

from ..runtime.errors import EncodingError
from .hashes import sha256_bytes
from .writer import BinaryWriter

if TYPE_CHECKING:
    from ..tx.transaction import Transaction

ChainId = Optional[Union[str, bytes]]


def chain_id_to_bytes(chain_id: ChainId) -> bytes:
    """
    Normalize a chain id given as hex or raw bytes.

    Raises:
        EncodingError: If a string chain id is not valid hex
    """
    if not chain_id:
        return b""
    if isinstance(chain_id, bytes):
        return chain_id
    try:
        return bytes.fromhex(chain_id)
    except ValueError as e:
        raise EncodingError(f"Chain id is not valid hex: {chain_id!r}", field="chain_id", cause=e)


def serialize_transaction(transaction: Transaction, chain_id: ChainId = None) -> bytes:
    """
    Serialize a transaction.

    Pure function of its inputs.

    Args:
        transaction: Transaction to encode
        chain_id: Optional network identifier prepended verbatim when non-empty

    Returns:
        Serialized transaction bytes

    Raises:
        EncodingError: If a field cannot be represented; ``error.field`` names it
    """
    writer = BinaryWriter()
    writer.bytes(chain_id_to_bytes(chain_id))

    writer.u16le(transaction.ref_block_num, 'ref_block_num')
    if not isinstance(transaction.ref_block_prefix, int):
        raise EncodingError("ref_block_prefix must be an integer", field='ref_block_prefix')
    writer.u32le(transaction.ref_block_prefix & 0xFFFFFFFF, 'ref_block_prefix')
    transaction.expiration.write(writer, 'expiration')

    writer.uvarint(len(transaction.operations), 'operations')
    for index, operation in enumerate(transaction.operations):
        try:
            operation.write(writer)
        except EncodingError as e:
            raise EncodingError(
                f"Operation #{index} ({operation.name}) cannot be encoded: {e.message}",
                field=f"operations[{index}].{e.field}" if e.field else f"operations[{index}]",
                cause=e
            )

    writer.uvarint(len(transaction.extensions), 'extensions')
    for extension in transaction.extensions:
        extension.write(writer, 'extensions')

    return writer.to_bytes()


def transaction_digest(transaction: Transaction, chain_id: ChainId = None) -> bytes:
    """SHA-256 of the chain-id-prefixed serialization; the value that gets signed."""
    return sha256_bytes(serialize_transaction(transaction, chain_id))


def transaction_id(transaction: Transaction) -> str:
    """
    Transaction id as reported by steemd.

    The first 20 bytes of the SHA-256 of the wire form, hex encoded.
    """
    return sha256_bytes(serialize_transaction(transaction))[:20].hex()


__all__ = [
    "chain_id_to_bytes",
    "serialize_transaction",
    "transaction_digest",
    "transaction_id",
]
