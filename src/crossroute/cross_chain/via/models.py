"""Via router API payloads.

Only the fields used for selection and execution are modelled; everything
else in the responses is ignored.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ViaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ViaTool(ViaModel):
    name: str = ""
    type: str = ""


class ViaStep(ViaModel):
    tool: ViaTool = Field(default_factory=ViaTool)


class ViaFeeToken(ViaModel):
    symbol: str = ""
    decimals: Optional[int] = None


class ViaProviderFee(ViaModel):
    amount: int = 0
    token: ViaFeeToken = Field(default_factory=ViaFeeToken)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return int(Decimal(str(value))) if value is not None else 0


class ViaAction(ViaModel):
    steps: list[ViaStep] = Field(default_factory=list)
    additional_provider_fee: Optional[ViaProviderFee] = Field(None, alias="additionalProviderFee")


class ViaRoute(ViaModel):
    route_id: str = Field(..., alias="routeId")
    to_token_amount: int = Field(..., alias="toTokenAmount")
    slippage: Optional[Decimal] = None
    actions: list[ViaAction] = Field(default_factory=list)

    @field_validator("to_token_amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return int(Decimal(str(value)))

    @property
    def provider_fee(self) -> Optional[ViaProviderFee]:
        if not self.actions:
            return None
        return self.actions[0].additional_provider_fee

    @property
    def steps(self) -> list[ViaStep]:
        return self.actions[0].steps if self.actions else []


class ViaRoutesResponse(ViaModel):
    routes: list[ViaRoute] = Field(default_factory=list)


class ViaPagesResponse(ViaModel):
    pages: int = 0


class ViaTransaction(ViaModel):
    to: str
    data: str
    value: int = 0

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, value):
        if value in (None, ""):
            return 0
        return int(value, 0) if isinstance(value, str) else int(value)
