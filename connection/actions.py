import asyncio
from enum import IntEnum
from typing import List, NamedTuple

from solders.keypair import Keypair
from solders.instruction import Instruction
from solders.signature import Signature
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts
from solana.transaction import Transaction


OPTS = TxOpts(skip_confirmation=False, preflight_commitment=Confirmed)


class SequenceType(IntEnum):
    """Ordering discipline for submitting several transaction batches."""

    SEQUENTIAL = 0
    """Each batch is confirmed before the next one is sent, the first failure stops the rest."""
    PARALLEL = 1
    """All batches are sent at once, the first failure cancels the ones still pending."""


class TransactionBatch(NamedTuple):
    """Instructions confirmed as one transaction, with the signers they need besides the wallet."""

    instructions: List[Instruction]
    signers: List[Keypair]


class TransactionFailedError(Exception):
    """A sent transaction was confirmed with an error, or its status is unknown."""


async def send_batch(client: AsyncClient, wallet: Keypair, batch: TransactionBatch) -> Signature:
    txn = Transaction(fee_payer=wallet.pubkey())
    for instruction in batch.instructions:
        txn.add(instruction)
    recent_blockhash = (await client.get_latest_blockhash()).value.blockhash
    resp = await client.send_transaction(
        txn, wallet, *batch.signers, recent_blockhash=recent_blockhash, opts=OPTS)
    signature = resp.value
    # confirmation only waits for the commitment level, the outcome is in the status
    resp = await client.get_signature_statuses([signature])
    status = resp.value[0]
    if status is None:
        raise TransactionFailedError(f"No status for transaction {signature}")
    if status.err is not None:
        raise TransactionFailedError(f"Transaction {signature} failed: {status.err}")
    return signature


async def send_transactions(
    client: AsyncClient,
    wallet: Keypair,
    batches: List[TransactionBatch],
    sequence_type: SequenceType,
) -> List[Signature]:
    batches = [batch for batch in batches if batch.instructions]
    if sequence_type == SequenceType.PARALLEL:
        tasks = [asyncio.ensure_future(send_batch(client, wallet, batch)) for batch in batches]
        try:
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            raise

    signatures = []
    for index, batch in enumerate(batches):
        print(f"Sending transaction {index + 1} of {len(batches)}")
        signatures.append(await send_batch(client, wallet, batch))
    return signatures
