from common.schema import FetchResult, OnChainSupplyData, SupplyResult
import logging

logger = logging.getLogger("CirculatingSupply.Calculation")


def format_units(value: int, decimals: int) -> str:
    """Render a raw integer amount as a decimal string scaled by 10**decimals.

    Pure integer arithmetic; no float or Decimal rounding is involved.
    Trailing zeros of the fraction are trimmed but one fractional digit is
    always kept (``900000.0``). With ``decimals == 0`` the integer is
    returned as is. Negative amounts keep their sign (``-50.5``).
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    value = int(value)
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10 ** decimals)
    if decimals == 0:
        return f"{sign}{whole}"
    fraction_str = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_str}"


def sum_balances(results: list[FetchResult]) -> int:
    return sum(result.value for result in results)


def calculate_supplies(onchain_data: OnChainSupplyData) -> SupplyResult:
    logger.info("Supply Calculation Initialized")
    burned = sum_balances(onchain_data.burn_balances)
    team = sum_balances(onchain_data.team_balances)

    # No clamping: exclusions larger than the raw supply give a negative result.
    after_burn = onchain_data.raw_total_supply - burned
    circulating = after_burn - team

    decimals = onchain_data.decimals.value
    defaulted_addresses = [
        r.address for r in onchain_data.burn_balances + onchain_data.team_balances if r.defaulted
    ]
    logger.debug(f"Raw total: {onchain_data.raw_total_supply}, Burned: {burned}, Team: {team}, Decimals: {decimals}")
    if circulating < 0:
        logger.warning(f"Excluded balances exceed total supply of {onchain_data.token_address}: circulating={circulating}")

    result = SupplyResult(
        total_supply=format_units(after_burn, decimals),
        circulating_supply=format_units(circulating, decimals),
        raw_total_supply=onchain_data.raw_total_supply,
        burned_amount=burned,
        team_amount=team,
        decimals=decimals,
        decimals_defaulted=onchain_data.decimals.defaulted,
        defaulted_addresses=defaulted_addresses,
    )
    logger.info(f"Supply Calculation Completed: total={result.total_supply}, circulating={result.circulating_supply}")
    return result
