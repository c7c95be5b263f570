"""Best-route selection for providers that return several candidate routes.

Candidates whose execution target is not a whitelisted router never reach
trade construction, however good their output is.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any, Optional, Sequence

from crossroute.core.web3_pure import DECIMAL_PRECISION, compare_addresses, from_wei

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteCandidate:
    """One upstream route reduced to what selection needs.

    target is the contract the route's transaction calls, known only after
    the route has been built. route keeps the provider's own payload.
    """

    route_id: str
    to_wei_amount: int
    provider_fee_wei: int = 0
    target: Optional[str] = None
    route: Any = None


def filter_whitelisted(
    candidates: Sequence[RouteCandidate], whitelist: Sequence[str]
) -> list[RouteCandidate]:
    """Keep candidates with a resolved target present in `whitelist`."""
    allowed = []
    for candidate in candidates:
        if candidate.target is None:
            continue
        if any(compare_addresses(candidate.target, address) for address in whitelist):
            allowed.append(candidate)
        else:
            logger.warning(
                f"Route {candidate.route_id} dropped: target {candidate.target} is not whitelisted"
            )
    return allowed


def route_profit(
    candidate: RouteCandidate,
    to_decimals: int,
    to_price: Decimal,
    native_price: Optional[Decimal],
    native_decimals: int = 18,
) -> Decimal:
    """USD value of the output minus USD value of the native provider fee."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        profit = to_price * from_wei(candidate.to_wei_amount, to_decimals)
        if native_price is not None:
            profit -= native_price * from_wei(candidate.provider_fee_wei, native_decimals)
        return profit


def select_best_route(
    candidates: Sequence[RouteCandidate],
    to_decimals: int,
    to_price: Optional[Decimal] = None,
    native_price: Optional[Decimal] = None,
    native_decimals: int = 18,
) -> Optional[RouteCandidate]:
    """Most profitable candidate, or None when there is nothing to choose from.

    Without a destination price the raw output amount decides. Equal scores
    go to the lowest route id so the result does not depend on input order.
    """
    if not candidates:
        return None

    if to_price is None:
        def score(candidate: RouteCandidate) -> Decimal:
            return Decimal(candidate.to_wei_amount)
    else:
        def score(candidate: RouteCandidate) -> Decimal:
            return route_profit(candidate, to_decimals, to_price, native_price, native_decimals)

    ranked = sorted(candidates, key=lambda c: c.route_id)
    ranked.sort(key=score, reverse=True)
    return ranked[0]
