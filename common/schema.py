from pydantic import BaseModel, Field
from common.settings import supported_chains


class FetchResult(BaseModel):
    # Outcome of one guarded contract read. defaulted=True means value is the fallback, not chain data.
    address: str | None = None
    value: int
    defaulted: bool = False
    error: str | None = None


class OnChainSupplyData(BaseModel):
    chain: str
    token_address: str
    block_identifier: str | int = "latest"
    raw_total_supply: int = Field(..., description="totalSupply() in the token's smallest unit")
    decimals: FetchResult
    burn_balances: list[FetchResult] = []
    team_balances: list[FetchResult] = []


class SupplyRequest(BaseModel):
    chain: str = Field(..., min_length=1, description="Chain key, e.g. bnb or base")
    token_address: str = Field(..., description="ERC-20 token contract address")
    burn_addresses: list[str] = []
    team_addresses: list[str] = []

    def check_chain(self):
        if self.chain.lower() not in supported_chains():
            raise ValueError(f"Unsupported chain: {self.chain}. Supported chains: {supported_chains()}")


class SupplyResult(BaseModel):
    total_supply: str = Field(..., serialization_alias="totalSupply")
    circulating_supply: str = Field(..., serialization_alias="circulatingSupply")

    raw_total_supply: int
    burned_amount: int
    team_amount: int
    decimals: int
    decimals_defaulted: bool = False
    # Burn/team addresses whose balance could not be read and were counted as 0
    defaulted_addresses: list[str] = []

    @property
    def degraded(self) -> bool:
        return self.decimals_defaulted or bool(self.defaulted_addresses)

    def to_response(self) -> dict[str, str]:
        """Public shape served to API clients."""
        return self.model_dump(by_alias=True, include={"total_supply", "circulating_supply"})

    def __str__(self) -> str:
        rows = [
            ["Raw total supply", str(self.raw_total_supply)],
            ["Burned (raw)", str(self.burned_amount)],
            ["Team held (raw)", str(self.team_amount)],
            ["Decimals", f"{self.decimals}{' (default)' if self.decimals_defaulted else ''}"],
            ["Total supply", self.total_supply],
            ["Circulating supply", self.circulating_supply],
        ]
        width = max(len(r[0]) for r in rows)
        lines = [f"{label.ljust(width)} | {value}" for label, value in rows]
        if self.defaulted_addresses:
            lines.append(f"{'Defaulted to 0'.ljust(width)} | {', '.join(self.defaulted_addresses)}")
        return "\n".join(lines)
