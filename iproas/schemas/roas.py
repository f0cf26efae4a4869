# iproas/schemas/roas.py
# -----------------------------------------------------------------------------
# IP-ROAS domain types and request/response schemas
# - Product / ClientParameters are the only inputs of the engine
# - Results / SensitivityPoint are fully derived, never persisted
# - non-finite floats (the "undefined" sentinel) become null in JSON only
# -----------------------------------------------------------------------------
import math
from enum import Enum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from iproas.core.config import settings


def _finite_or_none(value: Union[int, float]) -> Optional[Union[int, float]]:
    return value if math.isfinite(value) else None


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: float
    gross_margin: float  # fraction, 0.30 = 30%


class ClientParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    ad_spend: float = 0.0  # IP
    fixed_fee: float = 0.0  # TF
    expected_income: float = 0.0  # IE
    products: Tuple[Product, ...] = ()


class Results(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip_roas: float
    min_units_to_sell: Union[int, float]  # VUM, inf when it overflows
    min_traditional_roas: float
    estimated_cost_per_result: float
    total_cost: float
    min_margin_used: float
    critical_product_price: float
    critical_product_name: str

    @field_serializer(
        "ip_roas",
        "min_units_to_sell",
        "min_traditional_roas",
        "estimated_cost_per_result",
        "total_cost",
        "min_margin_used",
        when_used="json",
    )
    def _json_ratio(self, value: Union[int, float]) -> Optional[Union[int, float]]:
        return _finite_or_none(value)


class SensitivityPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    ip_roas: float
    traditional_roas: float

    @field_serializer("x", "ip_roas", "traditional_roas", when_used="json")
    def _json_ratio(self, value: float) -> Optional[float]:
        return _finite_or_none(value)


class SensitivityKind(str, Enum):
    AD_SPEND = "IP"
    FIXED_FEE = "TF"
    EXPECTED_INCOME = "IE"
    GROSS_MARGIN = "Margen"


class SensitivityConfig(BaseModel):
    kind: SensitivityKind
    title: str
    x_label: str
    x_format: str  # "currency" | "percent"


SENSITIVITY_CONFIGS: List[SensitivityConfig] = [
    SensitivityConfig(
        kind=SensitivityKind.AD_SPEND,
        title="Sensibilidad IP-ROAS vs Inversión Publicitaria",
        x_label="Inversión Publicitaria ($)",
        x_format="currency",
    ),
    SensitivityConfig(
        kind=SensitivityKind.FIXED_FEE,
        title="Sensibilidad IP-ROAS vs Tarifa Fija",
        x_label="Tarifa Fija ($)",
        x_format="currency",
    ),
    SensitivityConfig(
        kind=SensitivityKind.EXPECTED_INCOME,
        title="Sensibilidad IP-ROAS vs Ingreso Esperado",
        x_label="Ingreso Esperado ($)",
        x_format="currency",
    ),
    SensitivityConfig(
        kind=SensitivityKind.GROSS_MARGIN,
        title="Sensibilidad IP-ROAS vs Margen Bruto",
        x_label="Margen Bruto (%)",
        x_format="percent",
    ),
]


def config_for(kind: SensitivityKind) -> SensitivityConfig:
    return next(c for c in SENSITIVITY_CONFIGS if c.kind == kind)


# ── API payloads ──────────────────────────────────────────────────────────────
class ProductEntry(BaseModel):
    """Hand-entered product; the margin is typed as a percentage."""

    name: str
    price: float = Field(gt=0)
    margin_pct: float = Field(gt=0, le=100)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    def to_product(self) -> Product:
        return Product(name=self.name, price=self.price, gross_margin=self.margin_pct / 100)


class SensitivityRequest(BaseModel):
    params: ClientParameters
    point_count: int = Field(settings.SENSITIVITY_POINTS, ge=1, le=1000)


class SensitivityResponse(BaseModel):
    kind: SensitivityKind
    config: SensitivityConfig
    points: Optional[List[SensitivityPoint]] = None  # null = empty portfolio


class ContextResponse(BaseModel):
    context: str
