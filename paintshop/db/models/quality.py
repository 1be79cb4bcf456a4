from __future__ import annotations

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paintshop.db.base import Base, JSONType, SerialPkMixin, TimestampMixin
from paintshop.db.models.security import Usuario

SEVERITY_LEVELS = ("baixa", "media", "alta", "critica")
FORM_STATUSES = ("aberto", "em_andamento", "concluido", "cancelado")
DISCIPLINE_IDS = ("D1", "D2", "D3", "D4", "D5", "D6", "D7", "D8")
DISCIPLINE_STATUSES = ("pendente", "em_andamento", "concluida")
ISHIKAWA_CATEGORIES = ("mao_de_obra", "maquina", "material", "metodo", "meio_ambiente", "medicao")
ACTION_TYPES = ("imediata", "corretiva", "preventiva")
ACTION_STATUSES = ("pendente", "em_andamento", "concluida", "atrasada")


class Form8D(SerialPkMixin, TimestampMixin, Base):
    """8D problem report header."""
    __tablename__ = "forms_8d"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    problem_description: Mapped[str] = mapped_column(Text, nullable=False)
    team_members: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    problem_date: Mapped[date] = mapped_column(Date, nullable=False)
    detection_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    customer_impact: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    severity_level: Mapped[str] = mapped_column(String(16), nullable=False, default="media")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="aberto", index=True)
    created_by: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True
    )
    assigned_to: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True
    )

    creator: Mapped[Optional[Usuario]] = relationship(foreign_keys=[created_by], lazy="joined")
    assignee: Mapped[Optional[Usuario]] = relationship(foreign_keys=[assigned_to], lazy="joined")


class Form8DDiscipline(SerialPkMixin, TimestampMixin, Base):
    """Progress of one of the eight disciplines (D1..D8) of a report."""
    __tablename__ = "form_8d_disciplines"
    __table_args__ = (
        UniqueConstraint("form_8d_id", "discipline_id", name="uq_form_8d_disciplines_form_discipline"),
    )

    form_8d_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("forms_8d.id", ondelete="CASCADE"), nullable=False, index=True
    )
    discipline_id: Mapped[str] = mapped_column(String(2), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pendente")
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    responsible_person: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    completion_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class IshikawaCause(SerialPkMixin, TimestampMixin, Base):
    """Cause-and-effect entry of the Ishikawa diagram for a report."""
    __tablename__ = "ishikawa_analysis"

    form_8d_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("forms_8d.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    cause_description: Mapped[str] = mapped_column(Text, nullable=False)
    subcause_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    impact_level: Mapped[int] = mapped_column(Integer, nullable=False, default=3)


class FiveWhysAnalysis(SerialPkMixin, TimestampMixin, Base):
    """Five-whys root cause analysis; at most one per report."""
    __tablename__ = "five_whys_analysis"

    form_8d_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("forms_8d.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    problem_statement: Mapped[str] = mapped_column(Text, nullable=False)
    why_1: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    why_2: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    why_3: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    why_4: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    why_5: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    root_cause: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class ActionPlan(SerialPkMixin, TimestampMixin, Base):
    """Immediate, corrective or preventive action attached to a report."""
    __tablename__ = "action_plans"

    form_8d_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("forms_8d.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type: Mapped[str] = mapped_column(String(16), nullable=False)
    action_description: Mapped[str] = mapped_column(Text, nullable=False)
    responsible_person: Mapped[str] = mapped_column(Text, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pendente")
    completion_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    verification_method: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    effectiveness_check: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
