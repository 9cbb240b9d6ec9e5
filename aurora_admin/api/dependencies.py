"""Service providers — wire gateways and settings into services per request."""

from fastapi import Depends

from aurora_admin.config import Settings, get_settings
from aurora_admin.infrastructure.supabase_gateway import (
    get_auth_gateway, get_table_gateway,
)
from aurora_admin.services.pdv_service import PDVService
from aurora_admin.services.user_service import UserService


def get_user_service(
    tables=Depends(get_table_gateway),
    auth=Depends(get_auth_gateway),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(tables, auth, settings.default_user_password)


def get_pdv_service(tables=Depends(get_table_gateway)) -> PDVService:
    return PDVService(tables)
