"""XY Finance API payloads."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class XyStatusCode(str, Enum):
    """statusCode values returned by /swap."""

    OK = "0"
    INSUFFICIENT_LIQUIDITY = "3"
    NO_ROUTE = "4"
    UNSUPPORTED_TOKEN = "5"
    MIN_AMOUNT = "6"
    BAD_REQUEST = "10"
    SERVER_ERROR = "99"


class XyFee(BaseModel):
    amount: Optional[Decimal] = None
    symbol: Optional[str] = None


class XyTransaction(BaseModel):
    to: str
    data: str
    value: int = 0

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, value):
        if value in (None, ""):
            return 0
        return int(value, 0) if isinstance(value, str) else value


class XyTransactionResponse(BaseModel):
    """Response of GET /swap. Every field may be missing on failure."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_success: Optional[bool] = Field(None, alias="isSuccess")
    status_code: Optional[str] = Field(None, alias="statusCode")
    msg: str = ""
    to_token_amount: Optional[str] = Field(None, alias="toTokenAmount")
    xy_fee: Optional[XyFee] = Field(None, alias="xyFee")
    tx: Optional[XyTransaction] = None

    @field_validator("status_code", "to_token_amount", mode="before")
    @classmethod
    def stringify(cls, value):
        return None if value is None else str(value)

    @field_validator("msg", mode="before")
    @classmethod
    def empty_msg(cls, value):
        return value or ""
