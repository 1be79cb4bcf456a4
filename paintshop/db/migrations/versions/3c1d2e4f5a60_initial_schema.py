"""Initial paint-line schema.

- usuarios
- registros
- configuracao_consumo_v2
- material_settings
- model_material_consumption
- item_requests
- forms_8d and its children (form_8d_disciplines, ishikawa_analysis,
  five_whys_analysis, action_plans)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1d2e4f5a60"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("nome", sa.Text(), nullable=False),
        sa.Column("senha", sa.Text(), nullable=False),
        sa.Column("papel", sa.Text(), server_default="operator", nullable=False),
        sa.Column("ativo", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("permissoes_customizadas", JSON_TYPE, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("username", name="uq_usuarios_username"),
        sa.UniqueConstraint("email", name="uq_usuarios_email"),
        sa.CheckConstraint("papel IN ('admin', 'manager', 'operator', 'viewer')", name="ck_usuarios_papel"),
    )

    op.create_table(
        "registros",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("data", sa.Date(), nullable=False),
        sa.Column("hora", sa.String(32), nullable=False),
        sa.Column("skids", sa.Integer(), server_default="0", nullable=False),
        sa.Column("skids_vazios", sa.Integer(), server_default="0", nullable=False),
        sa.Column("paradas", JSON_TYPE, nullable=False),
        sa.Column("producao", JSON_TYPE, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("data", "hora", name="uq_registros_data_hora"),
    )
    op.create_index("ix_registros_data", "registros", ["data"])

    op.create_table(
        "configuracao_consumo_v2",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("configuracao", JSON_TYPE, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_configuracao_consumo_v2_created_at", "configuracao_consumo_v2", ["created_at"])

    op.create_table(
        "material_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("material_name", sa.Text(), nullable=False),
        sa.Column("dilution_rate", sa.Float(), server_default="0", nullable=False),
        sa.Column("diluent_type", sa.Text(), nullable=True),
        sa.Column("catalyst_rate", sa.Float(), server_default="0", nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("material_name", name="uq_material_settings_material_name"),
    )

    op.create_table(
        "model_material_consumption",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("model", sa.Text(), nullable=False),
        sa.Column("color", sa.Text(), nullable=False),
        sa.Column("primer_ml_per_piece", sa.Float(), server_default="0", nullable=False),
        sa.Column("base_ml_per_piece", sa.Float(), server_default="0", nullable=False),
        sa.Column("varnish_ml_per_piece", sa.Float(), server_default="0", nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("model", "color", name="uq_model_material_consumption_model_color"),
    )

    op.create_table(
        "item_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("item_name", sa.Text(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.Text(), server_default="medium", nullable=False),
        sa.Column("status", sa.Text(), server_default="pending", nullable=False),
        sa.Column("requested_by", sa.Uuid(), nullable=False),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["requested_by"], ["usuarios.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assigned_to"], ["usuarios.id"], ondelete="SET NULL"),
        sa.CheckConstraint("quantity > 0", name="ck_item_requests_quantity_positive"),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_item_requests_priority"),
        sa.CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed', 'cancelled')", name="ck_item_requests_status"
        ),
    )
    op.create_index("ix_item_requests_requested_by", "item_requests", ["requested_by"])
    op.create_index("ix_item_requests_status", "item_requests", ["status"])

    op.create_table(
        "forms_8d",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("problem_description", sa.Text(), nullable=False),
        sa.Column("team_members", JSON_TYPE, nullable=False),
        sa.Column("problem_date", sa.Date(), nullable=False),
        sa.Column("detection_date", sa.Date(), nullable=True),
        sa.Column("customer_impact", sa.Text(), nullable=True),
        sa.Column("severity_level", sa.String(16), server_default="media", nullable=False),
        sa.Column("status", sa.String(16), server_default="aberto", nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["created_by"], ["usuarios.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_to"], ["usuarios.id"], ondelete="SET NULL"),
        sa.CheckConstraint("severity_level IN ('baixa', 'media', 'alta', 'critica')", name="ck_forms_8d_severity"),
        sa.CheckConstraint(
            "status IN ('aberto', 'em_andamento', 'concluido', 'cancelado')", name="ck_forms_8d_status"
        ),
    )
    op.create_index("ix_forms_8d_status", "forms_8d", ["status"])

    op.create_table(
        "form_8d_disciplines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("form_8d_id", sa.Integer(), nullable=False),
        sa.Column("discipline_id", sa.String(2), nullable=False),
        sa.Column("status", sa.String(16), server_default="pendente", nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("responsible_person", sa.Text(), nullable=True),
        sa.Column("completion_date", sa.Date(), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["form_8d_id"], ["forms_8d.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("form_8d_id", "discipline_id", name="uq_form_8d_disciplines_form_discipline"),
    )
    op.create_index("ix_form_8d_disciplines_form_8d_id", "form_8d_disciplines", ["form_8d_id"])

    op.create_table(
        "ishikawa_analysis",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("form_8d_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("cause_description", sa.Text(), nullable=False),
        sa.Column("subcause_description", sa.Text(), nullable=True),
        sa.Column("impact_level", sa.Integer(), server_default="3", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["form_8d_id"], ["forms_8d.id"], ondelete="CASCADE"),
        sa.CheckConstraint("impact_level BETWEEN 1 AND 5", name="ck_ishikawa_analysis_impact_level"),
    )
    op.create_index("ix_ishikawa_analysis_form_8d_id", "ishikawa_analysis", ["form_8d_id"])

    op.create_table(
        "five_whys_analysis",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("form_8d_id", sa.Integer(), nullable=False),
        sa.Column("problem_statement", sa.Text(), nullable=False),
        sa.Column("why_1", sa.Text(), nullable=True),
        sa.Column("why_2", sa.Text(), nullable=True),
        sa.Column("why_3", sa.Text(), nullable=True),
        sa.Column("why_4", sa.Text(), nullable=True),
        sa.Column("why_5", sa.Text(), nullable=True),
        sa.Column("root_cause", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["form_8d_id"], ["forms_8d.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("form_8d_id", name="uq_five_whys_analysis_form_8d_id"),
    )

    op.create_table(
        "action_plans",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("form_8d_id", sa.Integer(), nullable=False),
        sa.Column("action_type", sa.String(16), nullable=False),
        sa.Column("action_description", sa.Text(), nullable=False),
        sa.Column("responsible_person", sa.Text(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(16), server_default="pendente", nullable=False),
        sa.Column("completion_date", sa.Date(), nullable=True),
        sa.Column("verification_method", sa.Text(), nullable=True),
        sa.Column("effectiveness_check", sa.Text(), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["form_8d_id"], ["forms_8d.id"], ondelete="CASCADE"),
        sa.CheckConstraint("action_type IN ('imediata', 'corretiva', 'preventiva')", name="ck_action_plans_action_type"),
    )
    op.create_index("ix_action_plans_form_8d_id", "action_plans", ["form_8d_id"])


def downgrade() -> None:
    for table in (
        "action_plans",
        "five_whys_analysis",
        "ishikawa_analysis",
        "form_8d_disciplines",
        "forms_8d",
        "item_requests",
        "model_material_consumption",
        "material_settings",
        "configuracao_consumo_v2",
        "registros",
        "usuarios",
    ):
        op.drop_table(table)
