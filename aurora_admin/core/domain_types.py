"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, PdvId wrap the backend's UUID strings (auth account id == profile id)
    - Enum values match the strings stored by the hosted backend exactly
    - Table names live in Table; services never spell collection names inline

Design Decisions:
    - NewType over str: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and PostgREST filters without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
PdvId = NewType("PdvId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Platform roles — ADMIN manages, PROMOTOR supervises PDVs, PARCEIRO runs one."""
    ADMIN = "ADMIN"
    PROMOTOR = "PROMOTOR"
    PARCEIRO = "PARCEIRO"


class UserStatus(str, Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"


class PromoterLevel(str, Enum):
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"
    COORDENADOR = "COORDENADOR"


class PersonType(str, Enum):
    """Legal person type of a PDV owner (CPF vs CNPJ)."""
    FISICA = "FISICA"
    JURIDICA = "JURIDICA"


class StockStatus(str, Enum):
    NORMAL = "NORMAL"
    BAIXO = "BAIXO"


class FinancialStatus(str, Enum):
    """Portfolio financial status; installments are not linked to a PDV yet."""
    EM_DIA = "EM_DIA"


class InstallmentStatus(str, Enum):
    """Subset of parcelas_crediario.status values read by the admin service."""
    ATRASADO = "ATRASADO"


class Table(str, Enum):
    """Record collections exposed by the hosted table API."""
    USERS = "usuarios"
    PDVS = "pdvs"
    SALES = "vendas"
    INSTALLMENTS = "parcelas_crediario"
    PDV_STOCK = "estoque_pdv"
    SALE_ITEMS = "venda_itens"
