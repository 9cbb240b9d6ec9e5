"""PDV Service — point-of-sale management and network figures over the table API.

Invariants:
    - promotor_id / parceiro_id pass through sanitize_references before every write
      (insert: always written; update: only when present)
    - Join fields (promotor, parceiro) are stripped before any write
    - Independent reads run concurrently (asyncio.gather); the first failure propagates
    - update matching no row → ResourceNotFoundError
    - A partner owns at most one PDV: several matches → AmbiguousResourceError
    - Day and month boundaries come from the injected clock (UTC by default)

Design Decisions:
    - Promoter portfolio enrichment is one gather per PDV (stock + monthly sales),
      all PDVs gathered together: N small requests instead of a backend view
    - Dashboard figures for an unknown PDV are zeros, not a 404: the partner
      dashboard resolves the PDV first via get_by_partner
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from aurora_admin.core.domain_types import (
    FinancialStatus, InstallmentStatus, PdvId, Table, UserId,
)
from aurora_admin.core.errors import (
    AmbiguousResourceError, ErrorContext, ResourceNotFoundError, ValidationError,
)
from aurora_admin.core.filter_records import split_by_role
from aurora_admin.core.network_metrics import (
    commission_rate, daily_buckets, start_of_day, start_of_month,
    stock_status, stock_value, sum_field, sum_pieces,
)
from aurora_admin.core.repository_protocols import Row, TableGateway
from aurora_admin.core.sanitize_references import (
    PDV_JOIN_FIELDS, PDV_REFERENCE_FIELDS, sanitize_references, strip_join_fields,
)

logger = logging.getLogger(__name__)

# PostgREST embedded resources, disambiguated by FK constraint name
PDV_WITH_PROMOTER = "*, promotor:usuarios!pdvs_promotor_id_fkey(nome)"
PDV_WITH_PARTNER = "*, parceiro:usuarios!pdvs_parceiro_id_fkey(nome, whatsapp)"
STOCK_WITH_PRICE = "quantidade, produto:produtos(preco)"

DEFAULT_TREND_DAYS = 7
MAX_TREND_DAYS = 90


class PDVService:
    """PDV CRUD plus the aggregate reads behind the admin, promoter and partner screens."""

    def __init__(
        self, tables: TableGateway, clock: Callable[[], datetime] | None = None,
    ):
        self.tables = tables
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def list_pdvs(self) -> list[Row]:
        return await self.tables.select(
            Table.PDVS, PDV_WITH_PROMOTER, order_by="nome_fantasia", ascending=True,
        )

    async def create_pdv(self, data: dict[str, Any]) -> Row:
        payload = sanitize_references(
            strip_join_fields(data, PDV_JOIN_FIELDS), PDV_REFERENCE_FIELDS, partial=False,
        )
        rows = await self.tables.insert(Table.PDVS, [payload])
        row = rows[0]
        logger.info(
            f"PDV {row.get('id')} created",
            extra={"table": Table.PDVS.value, "operation": "create", "record_id": row.get("id")},
        )
        return row

    async def update_pdv(self, pdv_id: PdvId, updates: dict[str, Any]) -> Row:
        payload = sanitize_references(
            strip_join_fields(updates, PDV_JOIN_FIELDS), PDV_REFERENCE_FIELDS, partial=True,
        )
        rows = await self.tables.update(Table.PDVS, payload, match={"id": pdv_id})
        if not rows:
            raise ResourceNotFoundError(
                "PDV", pdv_id, ErrorContext(table=Table.PDVS.value, operation="update"),
            )
        logger.info(
            f"PDV {pdv_id} updated",
            extra={"table": Table.PDVS.value, "operation": "update", "record_id": pdv_id},
        )
        return rows[0]

    async def delete_pdv(self, pdv_id: PdvId) -> None:
        await self.tables.delete(Table.PDVS, match={"id": pdv_id})
        logger.info(
            f"PDV {pdv_id} deleted",
            extra={"table": Table.PDVS.value, "operation": "delete", "record_id": pdv_id},
        )

    async def get_stats(self) -> dict[str, float]:
        """Network revenue and overdue installment totals."""
        sales, overdue = await asyncio.gather(
            self.tables.select(Table.SALES, "valor_total"),
            self.tables.select(
                Table.INSTALLMENTS, "valor",
                filters={"status": InstallmentStatus.ATRASADO.value},
            ),
        )
        return {
            "total_revenue": sum_field(sales, "valor_total"),
            "total_default": sum_field(overdue, "valor"),
        }

    async def get_by_partner(self, parceiro_id: UserId) -> Row:
        context = ErrorContext(table=Table.PDVS.value, operation="select")
        # Two rows are enough to tell "one" from "several"
        rows = await self.tables.select(
            Table.PDVS, "*", filters={"parceiro_id": parceiro_id}, limit=2,
        )
        if not rows:
            raise ResourceNotFoundError("PDV for partner", parceiro_id, context)
        if len(rows) > 1:
            raise AmbiguousResourceError("PDV", parceiro_id, context)
        return rows[0]

    async def get_promoter_pdvs(self, promotor_id: UserId) -> list[Row]:
        """PDVs assigned to a promoter, each with stock value and monthly sales."""
        pdvs = await self.tables.select(
            Table.PDVS, PDV_WITH_PARTNER, filters={"promotor_id": promotor_id},
        )
        month_start = start_of_month(self._clock()).isoformat()
        enriched = list(await asyncio.gather(
            *(self._enrich(pdv, month_start) for pdv in pdvs),
        ))
        logger.info(
            f"Portfolio of promoter {promotor_id} loaded",
            extra={
                "table": Table.PDVS.value, "operation": "select",
                "record_id": promotor_id, "count": len(enriched),
            },
        )
        return enriched

    async def _enrich(self, pdv: Row, month_start: str) -> Row:
        stock, sales = await asyncio.gather(
            self.tables.select(
                Table.PDV_STOCK, STOCK_WITH_PRICE, filters={"pdv_id": pdv["id"]},
            ),
            self.tables.select(
                Table.SALES, "valor_total",
                filters={"pdv_id": pdv["id"]}, gte={"created_at": month_start},
            ),
        )
        value = stock_value(stock)
        return {
            **pdv,
            "estoque_valor": value,
            "vendas_mensais": sum_field(sales, "valor_total"),
            # TODO: derive from parcelas_crediario once installments carry pdv_id
            "status_financeiro": FinancialStatus.EM_DIA.value,
            "status_estoque": stock_status(value).value,
        }

    async def get_dashboard_stats(self, pdv_id: PdvId) -> dict[str, Any]:
        """Today's sales, stock pieces and the cycle commission rate of one PDV."""
        now = self._clock()
        today_sales, cycle_sales, stock = await asyncio.gather(
            self.tables.select(
                Table.SALES, "id, valor_total, created_at",
                filters={"pdv_id": pdv_id},
                gte={"created_at": start_of_day(now).isoformat()},
            ),
            self.tables.select(
                Table.SALES, "id",
                filters={"pdv_id": pdv_id},
                gte={"created_at": start_of_month(now).isoformat()},
            ),
            self.tables.select(Table.PDV_STOCK, "quantidade", filters={"pdv_id": pdv_id}),
        )

        pieces_sold = 0
        if cycle_sales:
            items = await self.tables.select(
                Table.SALE_ITEMS, "quantidade",
                in_={"venda_id": [sale["id"] for sale in cycle_sales]},
            )
            pieces_sold = sum_pieces(items)

        return {
            "today_sales_value": sum_field(today_sales, "valor_total"),
            "today_sales_count": len(today_sales),
            "pieces_in_stock": sum_pieces(stock),
            "pieces_sold_in_cycle": pieces_sold,
            "commission_rate": commission_rate(pieces_sold),
        }

    async def get_sales_trend(
        self, pdv_id: PdvId, days: int = DEFAULT_TREND_DAYS,
    ) -> list[dict[str, Any]]:
        """Sales per day over the last `days` days, today included."""
        if not 1 <= days <= MAX_TREND_DAYS:
            raise ValidationError(
                f"days must be between 1 and {MAX_TREND_DAYS}", field="days",
                context=ErrorContext(table=Table.SALES.value, operation="select"),
            )
        first_day = start_of_day(self._clock()) - timedelta(days=days - 1)
        sales = await self.tables.select(
            Table.SALES, "valor_total, created_at",
            filters={"pdv_id": pdv_id},
            gte={"created_at": first_day.isoformat()},
            order_by="created_at", ascending=True,
        )
        return daily_buckets(sales, first_day.date(), days)

    async def get_network_overview(
        self, users_source: Callable[[], Awaitable[list[Row]]],
    ) -> dict[str, Any]:
        """PDVs, promoters, partners and stats for the network screen, loaded together.

        users_source is UserService.list_users in production.
        """
        pdvs, users, stats = await asyncio.gather(
            self.list_pdvs(), users_source(), self.get_stats(),
        )
        promoters, partners = split_by_role(users)
        return {
            "pdvs": pdvs,
            "promoters": promoters,
            "partners": partners,
            "stats": stats,
        }
