"""Service test fixtures — in-memory backend + FastAPI test client.

Invariants:
    - Every test gets fresh InMemoryTables / FakeAuth instances
    - get_table_gateway / get_auth_gateway overridden; the Supabase client is never built
    - Lifespan is not run by ASGITransport, so no network IO happens at startup
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from aurora_admin.infrastructure.supabase_gateway import (
    get_auth_gateway, get_table_gateway,
)
from aurora_admin.main import app

from tests.services.fake_backend import FakeAuth, InMemoryTables

ADMIN_ID = "0b6f3a8e-1c2d-4e5f-8a9b-0c1d2e3f4a5b"
PROMOTER_ID = "1c7a4b9f-2d3e-4f60-9b0c-1d2e3f4a5b6c"
OTHER_PROMOTER_ID = "2d8b5c0a-3e4f-4071-8c1d-2e3f4a5b6c7d"
PARTNER_ID = "3e9c6d1b-4f50-4182-9d2e-3f4a5b6c7d8e"
PDV_CENTRO_ID = "4fad7e2c-5061-4293-8e3f-4a5b6c7d8e9f"
PDV_BAIRRO_ID = "50be8f3d-6172-43a4-9f40-5b6c7d8e9fa0"
SALE_CENTRO_OCT_ID = "61cf904e-7283-44b5-8a51-6c7d8e9fa0b1"
SALE_CENTRO_SEP_ID = "72d0a15f-8394-45c6-9b62-7d8e9fa0b1c2"
SALE_BAIRRO_OCT_ID = "83e1b260-94a5-46d7-8c73-8e9fa0b1c2d3"

# Monday; the seeded October sales fall in the current month
FIXED_NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


def seed_data():
    return {
        "usuarios": [
            {"id": ADMIN_ID, "nome": "Ana Admin", "email": "ana@aurora.com",
             "role": "ADMIN", "status": "ATIVO", "superior_id": None},
            {"id": PROMOTER_ID, "nome": "Bruno Promotor", "email": "bruno@aurora.com",
             "role": "PROMOTOR", "status": "ATIVO", "superior_id": ADMIN_ID},
            {"id": OTHER_PROMOTER_ID, "nome": "Carla Promotora", "email": "carla@aurora.com",
             "role": "PROMOTOR", "status": "INATIVO", "superior_id": ADMIN_ID},
            {"id": PARTNER_ID, "nome": "Diego Parceiro", "email": "diego@loja.com",
             "role": "PARCEIRO", "status": "ATIVO", "superior_id": None},
        ],
        "pdvs": [
            {"id": PDV_CENTRO_ID, "nome_fantasia": "Loja Centro", "cidade": "Curitiba",
             "estado": "PR", "promotor_id": PROMOTER_ID, "parceiro_id": PARTNER_ID,
             "promotor": {"nome": "Bruno Promotor"},
             "parceiro": {"nome": "Diego Parceiro", "whatsapp": "41999990000"}},
            {"id": PDV_BAIRRO_ID, "nome_fantasia": "Armarinho Bairro", "cidade": "Londrina",
             "estado": "PR", "promotor_id": OTHER_PROMOTER_ID, "parceiro_id": None,
             "promotor": {"nome": "Carla Promotora"}},
        ],
        "vendas": [
            {"id": SALE_CENTRO_OCT_ID, "pdv_id": PDV_CENTRO_ID, "valor_total": "150.50",
             "created_at": "2026-10-03T14:00:00+00:00"},
            {"id": SALE_CENTRO_SEP_ID, "pdv_id": PDV_CENTRO_ID, "valor_total": 49.5,
             "created_at": "2026-09-28T10:00:00+00:00"},
            {"id": SALE_BAIRRO_OCT_ID, "pdv_id": PDV_BAIRRO_ID, "valor_total": "300",
             "created_at": "2026-10-10T09:30:00+00:00"},
        ],
        # Centro sold 51 pieces in October (≥70% of the 72-piece kit)
        "venda_itens": [
            {"venda_id": SALE_CENTRO_OCT_ID, "quantidade": 30},
            {"venda_id": SALE_CENTRO_OCT_ID, "quantidade": 21},
            {"venda_id": SALE_CENTRO_SEP_ID, "quantidade": 20},
            {"venda_id": SALE_BAIRRO_OCT_ID, "quantidade": 5},
        ],
        "parcelas_crediario": [
            {"valor": "80.00", "status": "ATRASADO"},
            {"valor": "20.00", "status": "ATRASADO"},
            {"valor": "999.00", "status": "PAGO"},
        ],
        "estoque_pdv": [
            {"pdv_id": PDV_CENTRO_ID, "quantidade": 10, "produto": {"preco": 150}},
            {"pdv_id": PDV_CENTRO_ID, "quantidade": 4, "produto": {"preco": "200.00"}},
            {"pdv_id": PDV_BAIRRO_ID, "quantidade": 3, "produto": {"preco": 90}},
        ],
    }


@pytest.fixture
def tables():
    return InMemoryTables(seed_data())


@pytest.fixture
def auth(tables):
    return FakeAuth(tables)


@pytest.fixture
async def client(tables, auth):
    """FastAPI test client with backend gateways overridden."""
    app.dependency_overrides[get_table_gateway] = lambda: tables
    app.dependency_overrides[get_auth_gateway] = lambda: auth

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
