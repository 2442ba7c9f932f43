"""Governance Constants."""

from typing import List, NamedTuple, Tuple

from solana.constants import SYSTEM_PROGRAM_ID
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from governance.errors import DerivationError

GOVERNANCE_PROGRAM_ID = Pubkey.from_string("GqTPL6qRf5aUuqscLh8Rg2HTxPUXfhhAXDptTLhp1t2J")
"""Public key that identifies the Governance program."""

MAX_SEEDS: int = 16
"""Maximum number of seeds accepted for a program address."""

MAX_SEED_LEN: int = 32
"""Maximum length in bytes of a single seed."""


class ProgramIds(NamedTuple):
    """Program ids used to build governance transactions."""

    governance: Pubkey = GOVERNANCE_PROGRAM_ID
    """Governance program."""
    token: Pubkey = TOKEN_PROGRAM_ID
    """SPL Token program."""
    system: Pubkey = SYSTEM_PROGRAM_ID
    """System program."""


def find_program_address(seeds: List[bytes], program_id: Pubkey) -> Tuple[Pubkey, int]:
    """Derives a program address, rejecting seeds the runtime would refuse."""
    if len(seeds) > MAX_SEEDS:
        raise DerivationError(f"Too many seeds: {len(seeds)} > {MAX_SEEDS}")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise DerivationError(f"Seed of {len(seed)} bytes exceeds {MAX_SEED_LEN} bytes")
    return Pubkey.find_program_address(seeds, program_id)


def find_governance_voting_record_address(
    program_id: Pubkey,
    proposal_address: Pubkey,
    voting_account_address: Pubkey,
) -> Tuple[Pubkey, int]:
    """Generates the governance voting record address for a proposal and voting account"""
    return find_program_address(
        [
            GOVERNANCE_AUTHORITY_SEED,
            bytes(program_id),
            bytes(proposal_address),
            bytes(voting_account_address),
        ],
        program_id,
    )


def find_mint_authority_program_address(
    program_id: Pubkey,
    proposal_address: Pubkey,
) -> Tuple[Pubkey, int]:
    """Generates the mint authority program address for the proposal"""
    return find_program_address(
        [GOVERNANCE_AUTHORITY_SEED, bytes(proposal_address)],
        program_id,
    )


GOVERNANCE_AUTHORITY_SEED = b"governance"
"""Seed used to derive governance program addresses."""


class LABELS:
    """User facing notification messages."""

    VOTING_YEAH = "Voting for this proposal"
    VOTED_YEAH = "Voted for this proposal"
    VOTING_NAY = "Voting against this proposal"
    VOTED_NAY = "Voted against this proposal"
    TOKENS_VOTED_FOR_THE_PROPOSAL = "tokens voted for the proposal"
    TOKENS_VOTED_AGAINST_THE_PROPOSAL = "tokens voted against the proposal"
    PLEASE_WAIT = "Please wait..."
