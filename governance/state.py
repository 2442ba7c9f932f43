"""Governance account references."""

from enum import IntEnum
from typing import NamedTuple, Optional, Union

from solders.pubkey import Pubkey


class Proposal(NamedTuple):
    """Proposal being voted on, with the mints and holding account it uses."""

    pubkey: Pubkey
    """Proposal account."""
    source_mint: Pubkey
    """Mint of the tokens deposited to obtain voting tokens."""
    voting_mint: Pubkey
    """Mint of the voting tokens."""
    yes_voting_mint: Pubkey
    """Mint of the tokens recording yes votes."""
    no_voting_mint: Pubkey
    """Mint of the tokens recording no votes."""
    source_holding: Pubkey
    """Account holding deposited source tokens."""

    @classmethod
    def from_json(cls, data: dict):
        return Proposal(
            pubkey=Pubkey.from_string(data['pubkey']),
            source_mint=Pubkey.from_string(data['source_mint']),
            voting_mint=Pubkey.from_string(data['voting_mint']),
            yes_voting_mint=Pubkey.from_string(data['yes_voting_mint']),
            no_voting_mint=Pubkey.from_string(data['no_voting_mint']),
            source_holding=Pubkey.from_string(data['source_holding']),
        )


class Governance(NamedTuple):
    """Governance under which the proposal was created."""

    pubkey: Pubkey

    @classmethod
    def from_json(cls, data: dict):
        return Governance(pubkey=Pubkey.from_string(data['pubkey']))


class ProposalState(NamedTuple):
    """State account updated by the vote instruction."""

    pubkey: Pubkey

    @classmethod
    def from_json(cls, data: dict):
        return ProposalState(pubkey=Pubkey.from_string(data['pubkey']))


class Existing(NamedTuple):
    """Token account already owned by the voter."""

    address: Pubkey


class ToCreate(NamedTuple):
    """Token account to be created as part of the deposit."""


TO_CREATE = ToCreate()

VotingAccount = Union[Existing, ToCreate]


def voting_account(address: Optional[Pubkey]) -> VotingAccount:
    if address is None:
        return TO_CREATE
    return Existing(address)


class VoteDirection(IntEnum):
    """Side of the proposal a vote is cast for."""

    YEAH = 0
    NAY = 1


def vote_direction(yes_voting_token_amount: int, no_voting_token_amount: int) -> VoteDirection:
    """Checks that exactly one side carries a positive amount and returns that side."""
    if yes_voting_token_amount < 0 or no_voting_token_amount < 0:
        raise ValueError("Voting token amounts cannot be negative")
    if yes_voting_token_amount > 0 and no_voting_token_amount > 0:
        raise ValueError("Only one side of a proposal can be voted at a time")
    if yes_voting_token_amount > 0:
        return VoteDirection.YEAH
    if no_voting_token_amount > 0:
        return VoteDirection.NAY
    raise ValueError("One of the voting token amounts must be positive")
