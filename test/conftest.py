import asyncio
from data_pulling.onchain import evm
import pytest

UNIT = 10 ** 18
DEAD_ADDRESS = "0x000000000000000000000000000000000000dead"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
TEAM_ADDRESS = "0x73feaa1ee314f8c655e354234017be2193c9e24e"
TREASURY_ADDRESS = "0x1111111111111111111111111111111111111111"
TOKEN_ADDRESS = "0x0e09fabb73bd3ade0a17ecc321fd13a19e81ce82"
LATEST_BLOCK = 48_000_000


class StubCall:
    def __init__(self, result, delay=0):
        self.result = result
        self.delay = delay
        self.block_identifier = None
        self.finished = False

    async def call(self, block_identifier="latest"):
        self.block_identifier = block_identifier
        if self.delay:
            await asyncio.sleep(self.delay)
        self.finished = True
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class StubFunctions:
    def __init__(self, total_supply, decimals, balances, delays):
        self.total_supply = total_supply
        self.decimals_value = decimals
        self.balances = {k.lower(): v for k, v in balances.items()}
        self.delays = delays
        self.calls: list[tuple] = []
        self.issued: dict[str, list[StubCall]] = {}

    def _issue(self, name, result):
        call = StubCall(result, delay=self.delays.get(name, 0))
        self.issued.setdefault(name, []).append(call)
        return call

    def totalSupply(self):
        self.calls.append(("totalSupply",))
        return self._issue("totalSupply", self.total_supply)

    def decimals(self):
        self.calls.append(("decimals",))
        return self._issue("decimals", self.decimals_value)

    def balanceOf(self, owner):
        self.calls.append(("balanceOf", owner))
        return self._issue("balanceOf", self.balances.get(owner.lower(), 0))

    def block_identifiers(self) -> set:
        return {call.block_identifier for calls in self.issued.values() for call in calls}


class StubContract:
    """Minimal stand-in for an AsyncWeb3 ERC20 contract handle."""

    def __init__(self, total_supply=0, decimals=18, balances=None, delays=None):
        self.functions = StubFunctions(total_supply, decimals, balances or {}, delays or {})


class StubProvider:
    def __init__(self):
        self.disconnected = False

    async def disconnect(self):
        self.disconnected = True


class StubEth:
    def __init__(self, block_number=LATEST_BLOCK):
        self._block_number = block_number
        self.block_number_reads = 0

    @property
    def block_number(self):
        self.block_number_reads += 1
        return self._read_block_number()

    async def _read_block_number(self):
        return self._block_number

    async def get_block(self, block_identifier):
        return {"number": self._block_number - 64}


class StubWeb3:
    def __init__(self):
        self.provider = StubProvider()
        self.eth = StubEth()


@pytest.fixture
def stub_chain(monkeypatch):
    """Route evm.get_web3/get_token_contract to stubs. Returns a setter for the contract."""
    state = {"contract": StubContract(), "web3": []}

    def fake_get_web3(chain):
        evm.resolve_rpc_url(chain)
        w3 = StubWeb3()
        state["web3"].append(w3)
        return w3

    def fake_get_token_contract(w3, token_address):
        return state["contract"]

    monkeypatch.setattr(evm, "get_web3", fake_get_web3)
    monkeypatch.setattr(evm, "get_token_contract", fake_get_token_contract)

    def use(contract: StubContract):
        state["contract"] = contract
        return state

    return use
