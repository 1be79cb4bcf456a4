from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from paintshop.db.base import Base, JSONType, TimestampMixin, UUIDPkMixin


class Registro(UUIDPkMixin, TimestampMixin, Base):
    """
    One hourly production slot of the paint line.

    paradas holds downtime entries {tipo, tempo, criterio, descricao};
    producao holds painted parts {modelo, cor, qtd, repintura}.
    """
    __tablename__ = "registros"
    __table_args__ = (UniqueConstraint("data", "hora", name="uq_registros_data_hora"),)

    data: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    hora: Mapped[str] = mapped_column(String(32), nullable=False)
    skids: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    skids_vazios: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    paradas: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    producao: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
