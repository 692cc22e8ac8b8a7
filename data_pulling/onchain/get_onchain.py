# Reads everything the supply calculation needs from one token contract.
from common.schema import FetchResult, OnChainSupplyData
from common.settings import SUPPLY_SETTINGS, normalize_block_identifier
from data_pulling.onchain import evm
from typing import Iterable
import asyncio, logging

logger = logging.getLogger("CirculatingSupply.Onchain")


def unique_addresses(addresses: Iterable[str]) -> list[str]:
    # Address lists are sets: the same account given twice must not be subtracted twice.
    seen: set[str] = set()
    result: list[str] = []
    for address in addresses or []:
        key = str(address).strip().lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(str(address).strip())
    return result


async def get_token_info(contract, block_identifier: str | int) -> tuple[int, FetchResult]:
    # decimals() must settle before a totalSupply error leaves, or the provider is closed under it
    raw_total_supply, decimals = await asyncio.gather(
        evm.get_total_supply(contract, block_identifier),
        evm.get_decimals(contract, block_identifier),
        return_exceptions=True,
    )
    if isinstance(raw_total_supply, BaseException):
        raise raw_total_supply
    return raw_total_supply, decimals


async def get_balances(contract, addresses: list[str], block_identifier: str | int) -> list[FetchResult]:
    coros = [evm.get_balance(contract, address, block_identifier) for address in addresses]
    if not coros:
        return []
    return list(await asyncio.gather(*coros))


async def get_onchain_data(
    chain: str,
    token_address: str,
    burn_addresses: Iterable[str],
    team_addresses: Iterable[str],
    block_identifier: str | int | None = None,
) -> OnChainSupplyData:
    block_identifier = normalize_block_identifier(
        block_identifier if block_identifier is not None else SUPPLY_SETTINGS.BLOCK_IDENTIFIER
    )
    burn = unique_addresses(burn_addresses)
    team = unique_addresses(team_addresses)

    w3 = evm.get_web3(chain)
    try:
        contract = evm.get_token_contract(w3, token_address)
        block_identifier = await evm.pin_block(w3, block_identifier)

        logger.debug(f"Request totalSupply/decimals of {token_address} on {chain} at {block_identifier}")
        raw_total_supply, decimals = await get_token_info(contract, block_identifier)

        # Burn and team batches are independent of each other
        logger.debug(f"Request {len(burn)} burn and {len(team)} team balances")
        burn_balances, team_balances = await asyncio.gather(
            get_balances(contract, burn, block_identifier),
            get_balances(contract, team, block_identifier),
        )
        logger.debug("Chain RPC Completed")
    finally:
        await w3.provider.disconnect()

    return OnChainSupplyData(
        chain=chain,
        token_address=token_address,
        block_identifier=block_identifier,
        raw_total_supply=raw_total_supply,
        decimals=decimals,
        burn_balances=burn_balances,
        team_balances=team_balances,
    )
