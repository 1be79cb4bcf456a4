from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import Float, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from paintshop.db.base import Base, JSONType, TimestampMixin, UUIDPkMixin


class ConsumptionConfiguration(UUIDPkMixin, TimestampMixin, Base):
    """Versioned consumption configuration; the newest row is the active one."""
    __tablename__ = "configuracao_consumo_v2"

    configuracao: Mapped[Dict[str, Any]] = mapped_column(JSONType, nullable=False)


class MaterialSetting(UUIDPkMixin, TimestampMixin, Base):
    """Dilution and catalyst rates for a paint material."""
    __tablename__ = "material_settings"

    material_name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    dilution_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    diluent_type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    catalyst_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0)


class ModelMaterialConsumption(UUIDPkMixin, TimestampMixin, Base):
    """Per-piece paint consumption (ml) for a model/colour pair."""
    __tablename__ = "model_material_consumption"
    __table_args__ = (
        UniqueConstraint("model", "color", name="uq_model_material_consumption_model_color"),
    )

    model: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str] = mapped_column(Text, nullable=False)
    primer_ml_per_piece: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    base_ml_per_piece: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    varnish_ml_per_piece: Mapped[float] = mapped_column(Float, nullable=False, default=0)
