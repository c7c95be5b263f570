"""Tests for error classification."""

from decimal import Decimal

import httpx
import pytest
from pydantic import ValidationError
from web3.exceptions import ContractLogicError

from crossroute.cross_chain.via.models import ViaRoute
from crossroute.errors import (
    ErrorKind,
    InsufficientLiquidityError,
    MinAmountError,
    NotSupportedTokensError,
    UnknownError,
    parse_error,
)


def validation_error() -> ValidationError:
    try:
        ViaRoute.model_validate({})
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


class TestParseError:
    """Tests for mapping arbitrary failures onto SDK errors."""

    def test_sdk_error_passes_through(self):
        err = NotSupportedTokensError()

        assert parse_error(err) is err

    def test_liquidity_revert(self):
        err = ContractLogicError("execution reverted: UniswapV2Library: INSUFFICIENT_LIQUIDITY")

        assert isinstance(parse_error(err), InsufficientLiquidityError)

    def test_other_revert(self):
        parsed = parse_error(ContractLogicError("execution reverted: Stargate: slippage too high"))

        assert isinstance(parsed, UnknownError)
        assert parsed.message.startswith("Contract call reverted")

    def test_http_status(self):
        request = httpx.Request("GET", "https://api.example.com/routes")
        err = httpx.HTTPStatusError(
            "bad gateway", request=request, response=httpx.Response(502, request=request)
        )

        assert parse_error(err).message == "Fetch failed: HTTP 502"

    def test_transport_error(self):
        assert parse_error(httpx.ReadTimeout("timed out")).message == "Fetch failed: ReadTimeout"

    def test_malformed_payload(self):
        parsed = parse_error(validation_error())

        assert parsed.kind == ErrorKind.UNKNOWN
        assert parsed.message == "Malformed provider response."

    @pytest.mark.parametrize("err,message", [(KeyError("x"), "'x'"), (RuntimeError(), "Unknown error.")])
    def test_unclassified(self, err, message):
        assert parse_error(err).message == message


class TestErrorPayloads:
    def test_min_amount(self):
        data = MinAmountError(Decimal("20.5"), "USDT").to_dict()

        assert data == {
            "kind": "min_amount",
            "message": "Minimum amount is 20.5 USDT.",
            "min_amount": "20.5",
            "token_symbol": "USDT",
        }

    def test_default_message(self):
        assert InsufficientLiquidityError().to_dict() == {
            "kind": "insufficient_liquidity",
            "message": "Insufficient liquidity.",
        }
