from common.schema import OnChainSupplyData, SupplyRequest, SupplyResult
from data_pulling.onchain.get_onchain import get_onchain_data
from supply_calculation import calculator
from typing import Iterable
import asyncio, logging

logger = logging.getLogger("CirculatingSupply.Tools")


async def compute_supplies(
    chain: str,
    token_address: str,
    burn_addresses: Iterable[str],
    team_addresses: Iterable[str],
    block_identifier: str | int | None = None,
) -> SupplyResult:
    """Total supply net of burn balances, and circulating supply net of team balances as well.

    Only decimals() and individual balanceOf() reads fall back to defaults;
    every other failure (unknown chain, unreachable node, totalSupply) is
    raised to the caller.
    """
    onchain_data: OnChainSupplyData = await get_onchain_data(
        chain=chain,
        token_address=token_address,
        burn_addresses=burn_addresses,
        team_addresses=team_addresses,
        block_identifier=block_identifier,
    )
    result: SupplyResult = calculator.calculate_supplies(onchain_data)
    if result.degraded:
        logger.warning(
            f"Supply of {token_address} on {chain} computed with defaults "
            f"(decimals_defaulted={result.decimals_defaulted}, addresses={result.defaulted_addresses})"
        )
    return result


def analyze(request: SupplyRequest) -> SupplyResult:
    request.check_chain()
    return asyncio.run(compute_supplies(
        chain=request.chain,
        token_address=request.token_address,
        burn_addresses=request.burn_addresses,
        team_addresses=request.team_addresses,
    ))
