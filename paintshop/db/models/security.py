from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from paintshop.db.base import Base, JSONType, TimestampMixin, UUIDPkMixin

USER_ROLES = ("admin", "manager", "operator", "viewer")


class Usuario(UUIDPkMixin, TimestampMixin, Base):
    """Application user with a single role (papel)."""
    __tablename__ = "usuarios"

    username: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    nome: Mapped[str] = mapped_column(Text, nullable=False)
    senha: Mapped[str] = mapped_column(Text, nullable=False)
    papel: Mapped[str] = mapped_column(Text, nullable=False, default="operator", server_default="operator")
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))
    permissoes_customizadas: Mapped[Optional[List[str]]] = mapped_column(JSONType, nullable=True, default=list)
