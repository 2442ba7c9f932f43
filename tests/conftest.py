import pytest
from typing import Any, List, NamedTuple, Optional

from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solana.rpc.core import RPCException

from governance.state import Governance, Proposal, ProposalState

TOKEN_ACCOUNT_RENT_EXEMPTION: int = 2_039_280


class Resp(NamedTuple):
    value: Any


class Blockhash(NamedTuple):
    blockhash: Hash


class Status(NamedTuple):
    err: Any


class FakeAsyncClient:
    """In-memory stand-in for `AsyncClient`, records every transaction it is asked to send."""

    def __init__(
        self,
        fail_on_send: Optional[int] = None,
        err_on_send: Optional[int] = None,
        rent_error: bool = False,
    ):
        self.fail_on_send = fail_on_send
        self.err_on_send = err_on_send
        self.rent_error = rent_error
        self.rent_requests = 0
        self.attempts: List[tuple] = []
        self.sent: List[tuple] = []

    async def get_minimum_balance_for_rent_exemption(self, size: int, commitment=None):
        self.rent_requests += 1
        if self.rent_error:
            raise RPCException("Node is unhealthy")
        return Resp(TOKEN_ACCOUNT_RENT_EXEMPTION)

    async def get_latest_blockhash(self, commitment=None):
        return Resp(Blockhash(Hash.default()))

    async def send_transaction(self, txn, *signers, recent_blockhash=None, opts=None):
        self.attempts.append((txn, signers))
        if self.fail_on_send == len(self.attempts):
            raise RPCException("Transaction simulation failed")
        self.sent.append((txn, signers))
        return Resp(Signature.default())

    async def get_signature_statuses(self, signatures, search_transaction_history=False):
        if self.err_on_send == len(self.sent):
            return Resp([Status(err="InstructionError(4, Custom(1))")])
        return Resp([Status(err=None) for _ in signatures])


class RecordingSender:
    """Submission channel that keeps the batches instead of sending them."""

    def __init__(self):
        self.calls: List[tuple] = []

    async def __call__(self, client, wallet, batches, sequence_type):
        self.calls.append((batches, sequence_type))
        return [Signature.default() for _ in batches]


@pytest.fixture
def async_client() -> FakeAsyncClient:
    return FakeAsyncClient()


@pytest.fixture
def payer() -> Keypair:
    return Keypair()


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def proposal() -> Proposal:
    return Proposal(
        pubkey=Pubkey.new_unique(),
        source_mint=Pubkey.new_unique(),
        voting_mint=Pubkey.new_unique(),
        yes_voting_mint=Pubkey.new_unique(),
        no_voting_mint=Pubkey.new_unique(),
        source_holding=Pubkey.new_unique(),
    )


@pytest.fixture
def governance() -> Governance:
    return Governance(pubkey=Pubkey.new_unique())


@pytest.fixture
def proposal_state() -> ProposalState:
    return ProposalState(pubkey=Pubkey.new_unique())
