"""PDV Schemas — Pydantic models for point-of-sale management endpoints.

Invariants:
    - PDVCreate.nome_fantasia is required, stripped, non-empty
    - promotor_id / parceiro_id accepted as Any and sanitized by the service
    - PDVUpdate tolerates the embedded `promotor` join field; the service strips it
    - estado is a two-letter UF code when present; a blank estado is stored as null
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aurora_admin.core.domain_types import FinancialStatus, PersonType, StockStatus
from aurora_admin.schemas.user import UserResponse

_UF_PATTERN = r"^[A-Za-z]{2}$"


def _blank_estado_to_none(v: Any) -> Any:
    # The PDV form starts with estado: "" and may submit it untouched
    if isinstance(v, str) and not v.strip():
        return None
    return v


class PDVCreate(BaseModel):
    nome_fantasia: str = Field(min_length=1, max_length=200)
    tipo_pessoa: PersonType | None = None
    documento: str | None = Field(None, max_length=20)
    endereco: str | None = Field(None, max_length=500)
    cidade: str | None = Field(None, max_length=120)
    estado: str | None = Field(None, pattern=_UF_PATTERN)
    promotor_id: Any = None
    parceiro_id: Any = None

    @field_validator("nome_fantasia")
    @classmethod
    def strip_nome_fantasia(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nome_fantasia cannot be empty or whitespace")
        return v

    @field_validator("estado", mode="before")
    @classmethod
    def blank_estado(cls, v: Any) -> Any:
        return _blank_estado_to_none(v)

    @field_validator("estado")
    @classmethod
    def upper_estado(cls, v: str | None) -> str | None:
        return v.upper() if v else v

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class PDVUpdate(BaseModel):
    nome_fantasia: str | None = Field(None, min_length=1, max_length=200)
    tipo_pessoa: PersonType | None = None
    documento: str | None = Field(None, max_length=20)
    endereco: str | None = Field(None, max_length=500)
    cidade: str | None = Field(None, max_length=120)
    estado: str | None = Field(None, pattern=_UF_PATTERN)
    promotor_id: Any = None
    parceiro_id: Any = None
    # Join field echoed back by edit forms
    promotor: dict[str, Any] | None = None

    @field_validator("estado", mode="before")
    @classmethod
    def blank_estado(cls, v: Any) -> Any:
        return _blank_estado_to_none(v)

    @field_validator("estado")
    @classmethod
    def upper_estado(cls, v: str | None) -> str | None:
        return v.upper() if v else v

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class PromoterRef(BaseModel):
    nome: str


class PartnerRef(BaseModel):
    nome: str
    whatsapp: str | None = None


class PDVResponse(BaseModel):
    """PDV row; `promotor` present when listed with the promoter join."""
    model_config = ConfigDict(extra="allow")

    id: str
    nome_fantasia: str
    tipo_pessoa: PersonType | None = None
    documento: str | None = None
    endereco: str | None = None
    cidade: str | None = None
    estado: str | None = None
    promotor_id: str | None = None
    parceiro_id: str | None = None
    created_at: str | None = None
    promotor: PromoterRef | None = None


class PromoterPDVResponse(PDVResponse):
    """PDV in a promoter's portfolio, enriched with stock and sales figures."""
    parceiro: PartnerRef | None = None
    estoque_valor: float
    vendas_mensais: float
    status_financeiro: FinancialStatus
    status_estoque: StockStatus


class PDVStats(BaseModel):
    total_revenue: float
    total_default: float


class NetworkOverview(BaseModel):
    """Everything the network management screen loads at once."""
    pdvs: list[PDVResponse]
    promoters: list[UserResponse]
    partners: list[UserResponse]
    stats: PDVStats


class PDVDashboardStats(BaseModel):
    """Figures on the partner's PDV dashboard."""
    today_sales_value: float
    today_sales_count: int
    pieces_in_stock: int
    pieces_sold_in_cycle: int
    commission_rate: float


class DailySales(BaseModel):
    date: str
    label: str
    value: float
