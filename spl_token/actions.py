from typing import List

from solders.pubkey import Pubkey
from solders.keypair import Keypair
from solders.instruction import Instruction
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solana.exceptions import SolanaRpcException
import solders.system_program as sys

from spl.token._layouts import ACCOUNT_LAYOUT
import spl.token.instructions as spl_token

from governance.constants import ProgramIds
from governance.errors import RentQueryError


async def get_token_account_rent_exemption(client: AsyncClient) -> int:
    try:
        resp = await client.get_minimum_balance_for_rent_exemption(ACCOUNT_LAYOUT.sizeof())
    except (RPCException, SolanaRpcException) as ex:
        raise RentQueryError("Could not fetch token account rent exemption") from ex
    return resp.value


def create_token_account(
    instructions: List[Instruction],
    signers: List[Keypair],
    payer: Pubkey,
    lamports: int,
    mint: Pubkey,
    owner: Pubkey,
    program_ids: ProgramIds,
) -> Pubkey:
    """Appends instructions creating a token account on a fresh keypair, returns its address."""
    account = Keypair()
    print(f"Creating token account {account.pubkey()} for mint {mint}")
    instructions.append(
        sys.create_account(
            sys.CreateAccountParams(
                from_pubkey=payer,
                to_pubkey=account.pubkey(),
                lamports=lamports,
                space=ACCOUNT_LAYOUT.sizeof(),
                owner=program_ids.token,
            )
        )
    )
    instructions.append(
        spl_token.initialize_account(
            spl_token.InitializeAccountParams(
                program_id=program_ids.token,
                account=account.pubkey(),
                mint=mint,
                owner=owner,
            )
        )
    )
    signers.append(account)
    return account.pubkey()


def approve(
    instructions: List[Instruction],
    signers: List[Keypair],
    account: Pubkey,
    owner: Pubkey,
    amount: int,
    program_ids: ProgramIds,
) -> Pubkey:
    """Appends an approval of `amount` to a new one-time delegate, returns the delegate."""
    delegate = Keypair()
    instructions.append(
        spl_token.approve(
            spl_token.ApproveParams(
                program_id=program_ids.token,
                source=account,
                delegate=delegate.pubkey(),
                owner=owner,
                amount=amount,
            )
        )
    )
    signers.append(delegate)
    return delegate.pubkey()
