from typing import Awaitable, Callable, List, NamedTuple, Tuple

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.sysvar import CLOCK, RENT
from solana.rpc.async_api import AsyncClient

from connection.actions import SequenceType, TransactionBatch, send_transactions
from governance.constants import (
    LABELS,
    ProgramIds,
    find_governance_voting_record_address,
    find_mint_authority_program_address,
)
from governance.errors import VoteFailedError
from governance.state import (
    TO_CREATE,
    Existing,
    ToCreate,
    Governance,
    Proposal,
    ProposalState,
    VoteDirection,
    VotingAccount,
    vote_direction,
)
import governance.instructions as gov
from spl_token.actions import approve, create_token_account, get_token_account_rent_exemption


Notifier = Callable[[str, str, str], None]
Sender = Callable[[AsyncClient, Keypair, List[TransactionBatch], SequenceType], Awaitable[List[Signature]]]


class DepositPhase(NamedTuple):
    """Deposit transaction and the accounts it creates or reuses."""

    batch: TransactionBatch
    governance_voting_record: Pubkey
    vote_account: Pubkey
    yes_vote_account: Pubkey
    no_vote_account: Pubkey
    mint_authority: Pubkey
    record_created: bool


def print_notification(message: str, description: str, notification_type: str):
    print(f"[{notification_type}] {message}: {description}")


def provision_token_account(
    batch: TransactionBatch,
    account: VotingAccount,
    payer: Pubkey,
    lamports: int,
    mint: Pubkey,
    program_ids: ProgramIds,
) -> Tuple[Pubkey, bool]:
    """Returns the token account address and whether it gets created in `batch`."""
    if isinstance(account, Existing):
        return (account.address, False)
    elif isinstance(account, ToCreate):
        address = create_token_account(
            batch.instructions, batch.signers, payer, lamports, mint, payer, program_ids)
        return (address, True)
    else:
        raise TypeError(f"Expected Existing or ToCreate voting account, got {type(account).__name__}")


def compose_deposit_phase(
    wallet: Pubkey,
    proposal: Proposal,
    source_account: Pubkey,
    voting_token_amount: int,
    lamports: int,
    mint_authority: Pubkey,
    vote_account: VotingAccount,
    yes_vote_account: VotingAccount,
    no_vote_account: VotingAccount,
    program_ids: ProgramIds,
) -> DepositPhase:
    batch = TransactionBatch(instructions=[], signers=[])

    (vote_address, vote_created) = provision_token_account(
        batch, vote_account, wallet, lamports, proposal.voting_mint, program_ids)

    (governance_voting_record, _bump) = find_governance_voting_record_address(
        program_ids.governance, proposal.pubkey, vote_address)

    # one record per voting account, created along with it
    if vote_created:
        batch.instructions.append(
            gov.create_empty_governance_voting_record(
                gov.CreateEmptyGovernanceVotingRecordParams(
                    program_id=program_ids.governance,
                    governance_voting_record=governance_voting_record,
                    proposal=proposal.pubkey,
                    voting_account=vote_address,
                    payer=wallet,
                    system_program_id=program_ids.system,
                    rent_sysvar=RENT,
                )
            )
        )

    (yes_address, _) = provision_token_account(
        batch, yes_vote_account, wallet, lamports, proposal.yes_voting_mint, program_ids)
    (no_address, _) = provision_token_account(
        batch, no_vote_account, wallet, lamports, proposal.no_voting_mint, program_ids)

    deposit_authority = approve(
        batch.instructions, batch.signers, source_account, wallet, voting_token_amount, program_ids)

    batch.instructions.append(
        gov.deposit_source_tokens(
            gov.DepositSourceTokensParams(
                program_id=program_ids.governance,
                governance_voting_record=governance_voting_record,
                voting_account=vote_address,
                source_account=source_account,
                source_holding=proposal.source_holding,
                voting_mint=proposal.voting_mint,
                proposal=proposal.pubkey,
                transfer_authority=deposit_authority,
                mint_authority=mint_authority,
                token_program_id=program_ids.token,
                voting_token_amount=voting_token_amount,
            )
        )
    )

    return DepositPhase(
        batch=batch,
        governance_voting_record=governance_voting_record,
        vote_account=vote_address,
        yes_vote_account=yes_address,
        no_vote_account=no_address,
        mint_authority=mint_authority,
        record_created=vote_created,
    )


def compose_vote_phase(
    wallet: Pubkey,
    deposit: DepositPhase,
    proposal: Proposal,
    governance: Governance,
    state: ProposalState,
    yes_voting_token_amount: int,
    no_voting_token_amount: int,
    program_ids: ProgramIds,
) -> TransactionBatch:
    batch = TransactionBatch(instructions=[], signers=[])

    vote_authority = approve(
        batch.instructions, batch.signers, deposit.vote_account, wallet,
        yes_voting_token_amount + no_voting_token_amount, program_ids)

    batch.instructions.append(
        gov.vote(
            gov.VoteParams(
                program_id=program_ids.governance,
                governance_voting_record=deposit.governance_voting_record,
                proposal_state=state.pubkey,
                voting_account=deposit.vote_account,
                yes_voting_account=deposit.yes_vote_account,
                no_voting_account=deposit.no_vote_account,
                voting_mint=proposal.voting_mint,
                yes_voting_mint=proposal.yes_voting_mint,
                no_voting_mint=proposal.no_voting_mint,
                source_mint=proposal.source_mint,
                proposal=proposal.pubkey,
                governance=governance.pubkey,
                transfer_authority=vote_authority,
                mint_authority=deposit.mint_authority,
                token_program_id=program_ids.token,
                clock_sysvar=CLOCK,
                yes_voting_token_amount=yes_voting_token_amount,
                no_voting_token_amount=no_voting_token_amount,
            )
        )
    )
    return batch


async def deposit_source_tokens_and_vote(
    client: AsyncClient,
    wallet: Keypair,
    proposal: Proposal,
    governance: Governance,
    state: ProposalState,
    source_account: Pubkey,
    yes_voting_token_amount: int,
    no_voting_token_amount: int,
    vote_account: VotingAccount = TO_CREATE,
    yes_vote_account: VotingAccount = TO_CREATE,
    no_vote_account: VotingAccount = TO_CREATE,
    program_ids: ProgramIds = ProgramIds(),
    notify: Notifier = print_notification,
    sender: Sender = send_transactions,
) -> List[Signature]:
    """Deposits source tokens for voting tokens, then votes them, in two sequential transactions.

    If the vote transaction fails after the deposit confirmed, the accounts
    created by the deposit are left in place. Call again passing them as
    `Existing` to vote without creating them twice.
    """
    direction = vote_direction(yes_voting_token_amount, no_voting_token_amount)
    voting_token_amount = yes_voting_token_amount if direction == VoteDirection.YEAH else no_voting_token_amount

    # derivation errors must surface before any network call
    (mint_authority, _bump) = find_mint_authority_program_address(program_ids.governance, proposal.pubkey)

    lamports = await get_token_account_rent_exemption(client)

    deposit = compose_deposit_phase(
        wallet.pubkey(), proposal, source_account, voting_token_amount, lamports, mint_authority,
        vote_account, yes_vote_account, no_vote_account, program_ids)
    vote_batch = compose_vote_phase(
        wallet.pubkey(), deposit, proposal, governance, state,
        yes_voting_token_amount, no_voting_token_amount, program_ids)

    if direction == VoteDirection.YEAH:
        (voting_msg, voted_msg, tokens_msg) = (
            LABELS.VOTING_YEAH,
            LABELS.VOTED_YEAH,
            f"{yes_voting_token_amount} {LABELS.TOKENS_VOTED_FOR_THE_PROPOSAL}.",
        )
    else:
        (voting_msg, voted_msg, tokens_msg) = (
            LABELS.VOTING_NAY,
            LABELS.VOTED_NAY,
            f"{no_voting_token_amount} {LABELS.TOKENS_VOTED_AGAINST_THE_PROPOSAL}.",
        )

    notify(voting_msg, LABELS.PLEASE_WAIT, 'warn')

    try:
        signatures = await sender(
            client, wallet, [deposit.batch, vote_batch], SequenceType.SEQUENTIAL)
    except Exception as ex:
        print(f"Vote on proposal {proposal.pubkey} failed: {ex!r}")
        raise VoteFailedError(f"Vote on proposal {proposal.pubkey} failed") from ex

    notify(voted_msg, tokens_msg, 'success')
    return signatures
