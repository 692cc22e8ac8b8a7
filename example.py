from app.tools import analyze
from common.schema import SupplyRequest
from common.settings import EXAMPLE, SUPPLY_SETTINGS
from rich import print
import logging

logger = logging.getLogger("CirculatingSupply")
logger.addHandler(logging.StreamHandler())
logger.setLevel(SUPPLY_SETTINGS.LOG_LEVEL)


def main():
    request = SupplyRequest(
        chain=EXAMPLE.CHAIN,
        token_address=EXAMPLE.TOKEN_ADDRESS,
        burn_addresses=EXAMPLE.BURN_ADDRESSES,
        team_addresses=EXAMPLE.TEAM_ADDRESSES,
    )
    logger.debug(f"Example request: {request}")
    result = analyze(request)
    print(f"totalSupply: {result.total_supply}")
    print(f"circulatingSupply: {result.circulating_supply}")
    print(str(result))
    return result


if __name__ == "__main__":
    main()
