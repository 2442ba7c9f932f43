"""Governance Program Instructions."""

from enum import IntEnum
from typing import NamedTuple

from construct import Struct, Switch, Int8ul, Int64ul, Pass  # type: ignore

from solders.pubkey import Pubkey
from solders.instruction import AccountMeta, Instruction


class CreateEmptyGovernanceVotingRecordParams(NamedTuple):
    """Creates the empty voting record tracking a voting account's votes on a proposal."""

    program_id: Pubkey
    """Governance program account."""
    governance_voting_record: Pubkey
    """`[w]` Governance voting record to create, derived from proposal and voting account."""
    proposal: Pubkey
    """`[]` Proposal account."""
    voting_account: Pubkey
    """`[]` Voting account the record tracks."""
    payer: Pubkey
    """`[s]` Payer for the record account."""
    system_program_id: Pubkey
    """`[]` System program."""
    rent_sysvar: Pubkey
    """`[]` Rent sysvar."""


class DepositSourceTokensParams(NamedTuple):
    """Deposits source tokens in exchange for voting tokens."""

    # Accounts
    program_id: Pubkey
    """Governance program account."""
    governance_voting_record: Pubkey
    """`[w]` Governance voting record."""
    voting_account: Pubkey
    """`[w]` Account receiving voting tokens."""
    source_account: Pubkey
    """`[w]` Voter's account holding source tokens."""
    source_holding: Pubkey
    """`[w]` Proposal's source token holding account."""
    voting_mint: Pubkey
    """`[w]` Voting token mint."""
    proposal: Pubkey
    """`[]` Proposal account."""
    transfer_authority: Pubkey
    """`[s]` Delegate approved to move the source tokens."""
    mint_authority: Pubkey
    """`[]` Proposal mint authority."""
    token_program_id: Pubkey
    """`[]` SPL Token program."""

    # Params
    voting_token_amount: int
    """Amount of source tokens to deposit."""


class VoteParams(NamedTuple):
    """Burns voting tokens and mints yes or no voting tokens in their place."""

    # Accounts
    program_id: Pubkey
    """Governance program account."""
    governance_voting_record: Pubkey
    """`[w]` Governance voting record."""
    proposal_state: Pubkey
    """`[w]` Proposal state account."""
    voting_account: Pubkey
    """`[w]` Account holding voting tokens to burn."""
    yes_voting_account: Pubkey
    """`[w]` Account receiving yes voting tokens."""
    no_voting_account: Pubkey
    """`[w]` Account receiving no voting tokens."""
    voting_mint: Pubkey
    """`[w]` Voting token mint."""
    yes_voting_mint: Pubkey
    """`[w]` Yes voting token mint."""
    no_voting_mint: Pubkey
    """`[w]` No voting token mint."""
    source_mint: Pubkey
    """`[]` Source token mint."""
    proposal: Pubkey
    """`[]` Proposal account."""
    governance: Pubkey
    """`[]` Governance account."""
    transfer_authority: Pubkey
    """`[s]` Delegate approved to burn the voting tokens."""
    mint_authority: Pubkey
    """`[]` Proposal mint authority."""
    token_program_id: Pubkey
    """`[]` SPL Token program."""
    clock_sysvar: Pubkey
    """`[]` Clock sysvar."""

    # Params
    yes_voting_token_amount: int
    """Amount of tokens voted for the proposal."""
    no_voting_token_amount: int
    """Amount of tokens voted against the proposal."""


class InstructionType(IntEnum):
    """Governance Instruction Types."""

    VOTE = 9
    DEPOSIT_SOURCE_TOKENS = 12
    CREATE_EMPTY_GOVERNANCE_VOTING_RECORD = 14


AMOUNT_LAYOUT = Struct(
    "voting_token_amount" / Int64ul,
)

VOTE_LAYOUT = Struct(
    "yes_voting_token_amount" / Int64ul,
    "no_voting_token_amount" / Int64ul,
)

INSTRUCTIONS_LAYOUT = Struct(
    "instruction_type" / Int8ul,
    "args"
    / Switch(
        lambda this: this.instruction_type,
        {
            InstructionType.VOTE: VOTE_LAYOUT,
            InstructionType.DEPOSIT_SOURCE_TOKENS: AMOUNT_LAYOUT,
            InstructionType.CREATE_EMPTY_GOVERNANCE_VOTING_RECORD: Pass,
        },
    ),
)


def create_empty_governance_voting_record(params: CreateEmptyGovernanceVotingRecordParams) -> Instruction:
    """Creates instruction to create an empty governance voting record."""
    return Instruction(
        accounts=[
            AccountMeta(pubkey=params.governance_voting_record, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.proposal, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.voting_account, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.payer, is_signer=True, is_writable=False),
            AccountMeta(pubkey=params.program_id, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.system_program_id, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.rent_sysvar, is_signer=False, is_writable=False),
        ],
        program_id=params.program_id,
        data=INSTRUCTIONS_LAYOUT.build(
            dict(
                instruction_type=InstructionType.CREATE_EMPTY_GOVERNANCE_VOTING_RECORD,
                args=None,
            )
        )
    )


def deposit_source_tokens(params: DepositSourceTokensParams) -> Instruction:
    """Creates a transaction instruction to deposit source tokens for voting tokens."""
    return Instruction(
        accounts=[
            AccountMeta(pubkey=params.governance_voting_record, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.voting_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.source_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.source_holding, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.voting_mint, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.proposal, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.transfer_authority, is_signer=True, is_writable=False),
            AccountMeta(pubkey=params.mint_authority, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.token_program_id, is_signer=False, is_writable=False),
        ],
        program_id=params.program_id,
        data=INSTRUCTIONS_LAYOUT.build(
            dict(
                instruction_type=InstructionType.DEPOSIT_SOURCE_TOKENS,
                args={'voting_token_amount': params.voting_token_amount}
            )
        )
    )


def vote(params: VoteParams) -> Instruction:
    """Creates a transaction instruction to vote on a proposal."""
    return Instruction(
        accounts=[
            AccountMeta(pubkey=params.governance_voting_record, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.proposal_state, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.voting_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.yes_voting_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.no_voting_account, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.voting_mint, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.yes_voting_mint, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.no_voting_mint, is_signer=False, is_writable=True),
            AccountMeta(pubkey=params.source_mint, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.proposal, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.governance, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.transfer_authority, is_signer=True, is_writable=False),
            AccountMeta(pubkey=params.mint_authority, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.token_program_id, is_signer=False, is_writable=False),
            AccountMeta(pubkey=params.clock_sysvar, is_signer=False, is_writable=False),
        ],
        program_id=params.program_id,
        data=INSTRUCTIONS_LAYOUT.build(
            dict(
                instruction_type=InstructionType.VOTE,
                args={
                    'yes_voting_token_amount': params.yes_voting_token_amount,
                    'no_voting_token_amount': params.no_voting_token_amount,
                }
            )
        )
    )
