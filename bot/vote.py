import argparse
import asyncio
import json

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed

from governance.actions import deposit_source_tokens_and_vote
from governance.constants import GOVERNANCE_PROGRAM_ID, ProgramIds
from governance.state import Governance, Proposal, ProposalState, voting_account


async def get_client(endpoint: str) -> AsyncClient:
    print(f'Connecting to network at {endpoint}')
    async_client = AsyncClient(endpoint=endpoint, commitment=Confirmed)
    total_attempts = 10
    current_attempt = 0
    while not await async_client.is_connected():
        if current_attempt == total_attempts:
            raise Exception("Could not connect to network")
        else:
            current_attempt += 1
        await asyncio.sleep(1)
    return async_client


async def vote(endpoint: str, voter: Keypair, proposal_file: str, source_account: Pubkey,
               yes_amount: int, no_amount: int, vote_account, yes_vote_account, no_vote_account,
               program_ids: ProgramIds):
    with open(proposal_file, 'r') as f:
        data = json.load(f)
    proposal = Proposal.from_json(data['proposal'])
    governance = Governance.from_json(data['governance'])
    state = ProposalState.from_json(data['state'])

    async_client = await get_client(endpoint)
    try:
        signatures = await deposit_source_tokens_and_vote(
            async_client, voter, proposal, governance, state, source_account,
            yes_amount, no_amount,
            vote_account=voting_account(vote_account),
            yes_vote_account=voting_account(yes_vote_account),
            no_vote_account=voting_account(no_vote_account),
            program_ids=program_ids,
        )
        for signature in signatures:
            print(f'Confirmed {signature}')
    finally:
        await async_client.close()


def keypair_from_file(keyfile_name: str) -> Keypair:
    with open(keyfile_name, 'r') as keyfile:
        data = keyfile.read()
    int_list = json.loads(data)
    return Keypair.from_bytes(bytes(int_list))


def optional_pubkey(value):
    return Pubkey.from_string(value) if value else None


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Deposit source tokens into a proposal and vote with them.')
    parser.add_argument('proposal', metavar='PROPOSAL_JSON', type=str,
                        help='File with the proposal, governance and proposal state addresses, e.g. proposal.json')
    parser.add_argument('voter', metavar='VOTER_KEYPAIR', type=str,
                        help='Voter wallet, given by a keypair file, e.g. voter.json')
    parser.add_argument('source_account', metavar='SOURCE_ACCOUNT', type=str,
                        help='Token account holding the source tokens to deposit, given by a public key in base-58')
    direction = parser.add_mutually_exclusive_group(required=True)
    direction.add_argument('--yes', metavar='AMOUNT', type=int, default=0,
                           help='Amount of tokens to vote for the proposal')
    direction.add_argument('--no', metavar='AMOUNT', type=int, default=0,
                           help='Amount of tokens to vote against the proposal')
    parser.add_argument('--vote-account', metavar='ADDRESS', type=str, default=None,
                        help='Existing voting token account, created if not given')
    parser.add_argument('--yes-vote-account', metavar='ADDRESS', type=str, default=None,
                        help='Existing yes voting token account, created if not given')
    parser.add_argument('--no-vote-account', metavar='ADDRESS', type=str, default=None,
                        help='Existing no voting token account, created if not given')
    parser.add_argument('--governance-program-id', metavar='PROGRAM_ID', type=str,
                        default=str(GOVERNANCE_PROGRAM_ID),
                        help='Governance program to use')
    parser.add_argument('--endpoint', metavar='ENDPOINT_URL', type=str,
                        default='https://api.mainnet-beta.solana.com',
                        help='RPC endpoint to use, e.g. https://api.mainnet-beta.solana.com')

    args = parser.parse_args()
    voter = keypair_from_file(args.voter)
    source_account = Pubkey.from_string(args.source_account)
    program_ids = ProgramIds(governance=Pubkey.from_string(args.governance_program_id))
    print(f'Voter public key: {voter.pubkey()}')
    asyncio.run(vote(
        args.endpoint, voter, args.proposal, source_account, args.yes, args.no,
        optional_pubkey(args.vote_account),
        optional_pubkey(args.yes_vote_account),
        optional_pubkey(args.no_vote_account),
        program_ids,
    ))
