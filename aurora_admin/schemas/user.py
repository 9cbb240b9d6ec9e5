"""User Schemas — Pydantic models for the user management endpoints.

Invariants:
    - UserCreate.nome: 1-200 chars, stripped; email lowercased and stripped
    - superior_id is accepted as Any: the service sanitizes it, the schema never rejects it
    - UserUpdate is partial — only fields explicitly sent are forwarded (exclude_unset)
    - senha "" is treated as absent (the service applies the default password)

Design Decisions:
    - Reference fields typed Any at the boundary: a placeholder from the form
      (empty string, mock id) must be coerced to null, not answered with a 400
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aurora_admin.core.domain_types import PromoterLevel, Role, UserStatus

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    """User creation — auth account plus profile metadata."""
    nome: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=320)
    role: Role = Role.PROMOTOR
    senha: str | None = Field(None, min_length=6, max_length=72)
    superior_id: Any = None
    status: UserStatus = UserStatus.ATIVO
    whatsapp: str | None = Field(None, max_length=30)
    endereco: str | None = Field(None, max_length=500)
    region: str | None = Field(None, max_length=100)
    nivel_promotor: PromoterLevel | None = None

    @field_validator("nome")
    @classmethod
    def strip_nome(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nome cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("senha", mode="before")
    @classmethod
    def blank_senha_means_default(cls, v: Any) -> Any:
        """An empty password field falls back to the configured default."""
        return None if v == "" else v


class UserUpdate(BaseModel):
    """Partial user update — unset fields are left untouched in the backend."""
    nome: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN, max_length=320)
    role: Role | None = None
    superior_id: Any = None
    status: UserStatus | None = None
    whatsapp: str | None = Field(None, max_length=30)
    endereco: str | None = Field(None, max_length=500)
    region: str | None = Field(None, max_length=100)
    nivel_promotor: PromoterLevel | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class UserResponse(BaseModel):
    """Profile row as stored in `usuarios`; unknown columns pass through."""
    model_config = ConfigDict(extra="allow")

    id: str
    nome: str
    email: str
    role: Role
    superior_id: str | None = None
    status: UserStatus | None = UserStatus.ATIVO
    whatsapp: str | None = None
    endereco: str | None = None
    region: str | None = None
    nivel_promotor: PromoterLevel | None = None
    created_at: str | None = None
