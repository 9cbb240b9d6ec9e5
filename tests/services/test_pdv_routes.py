"""PDV Routes — HTTP surface of point-of-sale management.

Invariants:
    - GET /pdvs filters by name/city substring and promotor_id ("TODOS" = all)
    - Static routes (/stats, /overview) are not captured by /{pdv_id}
    - Placeholder references never reach the insert payload
    - A blank estado from the PDV form is stored as null
    - Dashboard and trend read the PDV sales with the service clock
"""

import pytest

from aurora_admin.api.dependencies import get_pdv_service
from aurora_admin.main import app
from aurora_admin.services.pdv_service import PDVService

from tests.services.conftest import (
    FIXED_NOW, OTHER_PROMOTER_ID, PARTNER_ID, PDV_BAIRRO_ID, PDV_CENTRO_ID, PROMOTER_ID,
)


async def test_list_pdvs_includes_promoter_join(client):
    res = await client.get("/api/v1/pdvs")
    assert res.status_code == 200
    body = res.json()
    assert [p["nome_fantasia"] for p in body] == ["Armarinho Bairro", "Loja Centro"]
    assert body[1]["promotor"] == {"nome": "Bruno Promotor"}


async def test_list_pdvs_search_by_city(client):
    res = await client.get("/api/v1/pdvs", params={"q": "curiti"})
    assert [p["id"] for p in res.json()] == [PDV_CENTRO_ID]


async def test_list_pdvs_filter_by_promoter(client):
    res = await client.get("/api/v1/pdvs", params={"promotor_id": OTHER_PROMOTER_ID})
    assert [p["id"] for p in res.json()] == [PDV_BAIRRO_ID]


async def test_list_pdvs_todos_means_all(client):
    res = await client.get("/api/v1/pdvs", params={"promotor_id": "TODOS"})
    assert len(res.json()) == 2


async def test_create_pdv_from_blank_form(client, tables):
    res = await client.post("/api/v1/pdvs", json={
        "nome_fantasia": "Nova Loja",
        "tipo_pessoa": "FISICA",
        "documento": "",
        "endereco": "",
        "cidade": "",
        "estado": "",
        "promotor_id": "",
        "parceiro_id": "",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["promotor_id"] is None
    assert body["parceiro_id"] is None
    assert body["estado"] is None
    _, _, details = tables.calls_for("insert")[0]
    assert details["rows"][0]["promotor_id"] is None
    assert details["rows"][0]["estado"] is None


async def test_create_pdv_uppercases_estado(client):
    res = await client.post("/api/v1/pdvs", json={"nome_fantasia": "Nova Loja", "estado": "sc"})
    assert res.status_code == 201
    assert res.json()["estado"] == "SC"


async def test_patch_pdv_with_blank_estado(client, tables):
    res = await client.patch(f"/api/v1/pdvs/{PDV_CENTRO_ID}", json={"estado": ""})
    assert res.status_code == 200
    _, _, details = tables.calls_for("update")[0]
    assert details["values"] == {"estado": None}


async def test_create_pdv_requires_nome_fantasia(client):
    res = await client.post("/api/v1/pdvs", json={"nome_fantasia": "   "})
    assert res.status_code == 400


async def test_patch_pdv_ignores_promotor_join(client, tables):
    res = await client.patch(f"/api/v1/pdvs/{PDV_CENTRO_ID}", json={
        "nome_fantasia": "Loja Centro II",
        "promotor": {"nome": "Bruno Promotor"},
    })
    assert res.status_code == 200
    _, _, details = tables.calls_for("update")[0]
    assert details["values"] == {"nome_fantasia": "Loja Centro II"}


async def test_delete_pdv_returns_204(client):
    res = await client.delete(f"/api/v1/pdvs/{PDV_BAIRRO_ID}")
    assert res.status_code == 204


async def test_stats(client):
    res = await client.get("/api/v1/pdvs/stats")
    assert res.status_code == 200
    assert res.json() == {"total_revenue": 500.0, "total_default": 100.0}


async def test_overview(client):
    res = await client.get("/api/v1/pdvs/overview")
    assert res.status_code == 200
    body = res.json()
    assert len(body["pdvs"]) == 2
    assert [u["id"] for u in body["partners"]] == [PARTNER_ID]
    assert len(body["promoters"]) == 2
    assert body["stats"]["total_default"] == 100.0


async def test_by_partner(client):
    res = await client.get(f"/api/v1/pdvs/by-partner/{PARTNER_ID}")
    assert res.status_code == 200
    assert res.json()["id"] == PDV_CENTRO_ID


async def test_by_partner_not_found(client):
    res = await client.get(f"/api/v1/pdvs/by-partner/{PROMOTER_ID}")
    assert res.status_code == 404


async def test_promoter_portfolio(client):
    res = await client.get(f"/api/v1/pdvs/promoter/{PROMOTER_ID}")
    assert res.status_code == 200
    body = res.json()
    assert body[0]["estoque_valor"] == 2300.0
    assert body[0]["status_estoque"] == "NORMAL"
    assert body[0]["parceiro"]["whatsapp"] == "41999990000"


async def test_by_partner_with_several_pdvs_returns_409(client, tables):
    tables.rows("pdvs")[1]["parceiro_id"] = PARTNER_ID
    res = await client.get(f"/api/v1/pdvs/by-partner/{PARTNER_ID}")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "RESOURCE_AMBIGUOUS"


# ─── partner dashboard ───────────────────────────────────────────

@pytest.fixture
def pinned_clock(client, tables):
    """Serve PDV routes with the clock fixed at FIXED_NOW."""
    app.dependency_overrides[get_pdv_service] = (
        lambda: PDVService(tables, clock=lambda: FIXED_NOW)
    )


async def test_dashboard(client, pinned_clock):
    res = await client.get(f"/api/v1/pdvs/{PDV_CENTRO_ID}/dashboard")
    assert res.status_code == 200
    assert res.json() == {
        "today_sales_value": 0.0,
        "today_sales_count": 0,
        "pieces_in_stock": 14,
        "pieces_sold_in_cycle": 51,
        "commission_rate": 0.35,
    }


async def test_dashboard_malformed_id_returns_400(client):
    res = await client.get("/api/v1/pdvs/not-a-uuid/dashboard")
    assert res.status_code == 400


async def test_trend_defaults_to_seven_days(client, pinned_clock):
    res = await client.get(f"/api/v1/pdvs/{PDV_BAIRRO_ID}/trend")
    assert res.status_code == 200
    body = res.json()
    assert len(body) == 7
    assert body[-1] == {"date": "2026-10-19", "label": "Seg", "value": 0.0}


async def test_trend_out_of_range_days_returns_400(client, pinned_clock):
    res = await client.get(f"/api/v1/pdvs/{PDV_BAIRRO_ID}/trend", params={"days": 0})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "days" in error["message"]
