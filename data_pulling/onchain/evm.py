from common.settings import SUPPLY_SETTINGS, resolve_rpc_url
from common.schema import FetchResult
from web3 import AsyncWeb3, AsyncHTTPProvider
from pathlib import Path
import logging, yaml

# ERC20 contracts keep amounts as integers; decimals() gives the scale needed to read them.
ABI_PATH = Path(__file__).parent / "ABI.yaml"

logger = logging.getLogger("CirculatingSupply.Onchain.EVM")

_erc20_abi: list | None = None


def load_erc20_abi() -> list:
    global _erc20_abi
    if _erc20_abi is None:
        with open(ABI_PATH, 'r') as f:
            _erc20_abi = yaml.full_load(f)["ERC20"]
    return _erc20_abi


def get_web3(chain: str) -> AsyncWeb3:
    rpc_url = resolve_rpc_url(chain)
    logger.debug(f"Connecting to {chain} RPC node")
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def get_token_contract(w3: AsyncWeb3, token_address: str):
    return w3.eth.contract(
        address=AsyncWeb3.to_checksum_address(token_address),
        abi=load_erc20_abi(),
    )


async def pin_block(w3: AsyncWeb3, block_identifier: str | int) -> str | int:
    # Tags resolve per eth_call, so one number is fixed up front for every read of a run.
    if block_identifier == "latest":
        return await w3.eth.block_number
    if block_identifier in ("safe", "finalized"):
        block = await w3.eth.get_block(block_identifier)
        return block["number"]
    return block_identifier


async def get_total_supply(contract, block_identifier: str | int = "latest") -> int:
    # Failures propagate to the caller.
    raw_supply = await contract.functions.totalSupply().call(block_identifier=block_identifier)
    return int(raw_supply)


async def get_decimals(contract, block_identifier: str | int = "latest") -> FetchResult:
    try:
        decimals = await contract.functions.decimals().call(block_identifier=block_identifier)
        return FetchResult(value=int(decimals))
    except Exception as e:
        logger.warning(f"decimals() unreadable, assuming {SUPPLY_SETTINGS.DEFAULT_DECIMALS}: {e}")
        return FetchResult(value=SUPPLY_SETTINGS.DEFAULT_DECIMALS, defaulted=True, error=str(e))


async def get_balance(contract, address: str, block_identifier: str | int = "latest") -> FetchResult:
    try:
        owner = AsyncWeb3.to_checksum_address(address)
        balance = await contract.functions.balanceOf(owner).call(block_identifier=block_identifier)
        return FetchResult(address=address, value=int(balance))
    except Exception as e:
        logger.warning(f"balanceOf({address}) unreadable, counting it as 0: {e}")
        return FetchResult(address=address, value=0, defaulted=True, error=str(e))
