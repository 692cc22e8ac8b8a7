from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import logging
from dotenv import load_dotenv

# Local development reads .env; deployed containers inject the same variables directly.
load_dotenv()

logger = logging.getLogger("CirculatingSupply.Settings")


def parse_from_string_env(value: str) -> list[str]:
    if value is None:
        logger.error(f"{value} not given. Config your env variables")
        return None
    value = value.strip()
    if value.startswith("[") and value.endswith("]"):
        value = value[1:-1].replace('"', "").replace("'", "")
    # Both "[a, b]" and a bare "a,b" are accepted
    return [item.strip() for item in value.split(",") if item.strip()]


def normalize_block_identifier(value: str | int) -> str | int:
    """Block numbers given as text ("45000000" or "0x2aea540") become ints.

    Tags such as ``latest`` and 32-byte block hashes are returned unchanged.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text)
        if text.lower().startswith("0x") and len(text) != 66:
            return int(text, 16)
        return text
    return value


class ChainRPCURLs(BaseSettings):
    # One field per supported network. The field name is the upper-cased chain key.
    model_config = SettingsConfigDict(env_prefix="RPC_URL_", env_file=".env", env_file_encoding="utf-8", extra="ignore")
    BNB: str = "https://bsc-dataseed.binance.org/"
    BASE: str = "https://mainnet.base.org"


class SupplySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SUPPLY_", env_file=".env", env_file_encoding="utf-8", extra="ignore")
    DEFAULT_DECIMALS: int = 18
    BLOCK_IDENTIFIER: int | str = "latest"
    LOG_LEVEL: str = "INFO"

    @field_validator("BLOCK_IDENTIFIER")
    @classmethod
    def _block_number_as_int(cls, value):
        return normalize_block_identifier(value)


class ExampleSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EXAMPLE_", env_file=".env", env_file_encoding="utf-8", extra="ignore")
    CHAIN: str = "bnb"
    TOKEN_ADDRESS: str = "0x0E09FaBB73Bd3Ade0a17ECC321fD13a19e81cE82"
    BURN_ADDRESSES: list[str] | str = [
        "0x000000000000000000000000000000000000dEaD",
        "0x0000000000000000000000000000000000000000",
    ]
    TEAM_ADDRESSES: list[str] | str = [
        "0x73feaa1eE314F8c655E354234017bE2193C9E24E",
    ]

    def post_process(self):
        if isinstance(self.BURN_ADDRESSES, str):
            self.BURN_ADDRESSES = parse_from_string_env(self.BURN_ADDRESSES)
        if isinstance(self.TEAM_ADDRESSES, str):
            self.TEAM_ADDRESSES = parse_from_string_env(self.TEAM_ADDRESSES)
        return self


# Instance Initiate
CHAIN_RPC_URLS = ChainRPCURLs()
SUPPLY_SETTINGS = SupplySettings()
EXAMPLE = ExampleSettings().post_process()


def supported_chains() -> list[str]:
    return [name.lower() for name in ChainRPCURLs.model_fields]


def resolve_rpc_url(chain: str) -> str:
    """Map a chain key such as ``bnb`` or ``base`` to its RPC endpoint.

    Unknown chains are a configuration error, so this raises instead of
    handing an unusable endpoint to the provider.
    """
    key = str(chain).upper() if chain else ""
    rpc_url = getattr(CHAIN_RPC_URLS, key) if key in ChainRPCURLs.model_fields else None
    if not rpc_url:
        raise ValueError(f"Unsupported chain: {chain}. Supported chains: {supported_chains()}")
    return rpc_url
