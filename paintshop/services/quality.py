from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.db.models.quality import (
    ACTION_STATUSES,
    ACTION_TYPES,
    DISCIPLINE_IDS,
    DISCIPLINE_STATUSES,
    FORM_STATUSES,
    ISHIKAWA_CATEGORIES,
    SEVERITY_LEVELS,
    ActionPlan,
    FiveWhysAnalysis,
    Form8D,
    Form8DDiscipline,
    IshikawaCause,
)
from paintshop.db.models.security import Usuario
from paintshop.repositories.quality import Form8DRepository
from paintshop.schemas.quality import (
    ActionPlanCreate,
    ActionPlanUpdate,
    DisciplineUpdate,
    FiveWhysWrite,
    Form8DCreate,
    Form8DUpdate,
    IshikawaCreate,
    IshikawaUpdate,
)
from paintshop.services.base import BaseService

logger = logging.getLogger(__name__)

DISCIPLINE_TEMPLATES: Dict[str, Dict[str, str]] = {
    "D1": {"title": "D1 - Formar Equipe", "description": "Estabelecer uma equipe multidisciplinar"},
    "D2": {"title": "D2 - Descrever Problema", "description": "Definir e quantificar o problema"},
    "D3": {"title": "D3 - Ação Imediata", "description": "Implementar ações de contenção"},
    "D4": {"title": "D4 - Causa Raiz", "description": "Identificar e verificar a causa raiz"},
    "D5": {"title": "D5 - Ação Corretiva", "description": "Escolher e verificar ações corretivas"},
    "D6": {"title": "D6 - Implementar", "description": "Implementar ações corretivas permanentes"},
    "D7": {"title": "D7 - Prevenir", "description": "Prevenir recorrência do problema"},
    "D8": {"title": "D8 - Reconhecer", "description": "Reconhecer a equipe e capturar lições"},
}


def _require_fields(**values: Any) -> None:
    missing = [name for name, value in values.items() if value is None or (isinstance(value, str) and not value.strip())]
    if missing:
        raise BaseService.bad_request(f"Missing required fields: {', '.join(missing)}")


# PUBLIC_INTERFACE
def effective_discipline_status(
    discipline_id: str,
    stored: Optional[Form8DDiscipline],
    *,
    has_ishikawa: bool,
    five_whys: Optional[FiveWhysAnalysis],
    today: Optional[date] = None,
) -> str:
    """
    Status shown for a discipline after the automatic rules.

    D1 and D2 are complete once the report exists. D4 follows the root cause
    analyses. A started discipline past its completion date is late.
    """
    today = today or date.today()
    if discipline_id in ("D1", "D2"):
        return "concluida"
    if discipline_id == "D4":
        root_cause = bool(five_whys and (five_whys.root_cause or "").strip())
        if has_ishikawa and root_cause:
            return "concluida"
        if has_ishikawa or five_whys is not None:
            return "em_andamento"
    if stored is None:
        return "pendente"
    if stored.status == "concluida":
        return "concluida"
    if stored.status == "em_andamento" and stored.completion_date and stored.completion_date < today:
        return "atrasada"
    return stored.status or "pendente"


class Form8DService(BaseService):
    """8D reports with their disciplines, Ishikawa causes, five whys and action plans."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = Form8DRepository(session)

    # PUBLIC_INTERFACE
    @staticmethod
    def to_read(form: Form8D) -> Dict[str, Any]:
        return {
            "id": form.id,
            "title": form.title,
            "problem_description": form.problem_description,
            "team_members": list(form.team_members or []),
            "problem_date": form.problem_date,
            "detection_date": form.detection_date,
            "customer_impact": form.customer_impact,
            "severity_level": form.severity_level,
            "status": form.status,
            "created_by": form.created_by,
            "assigned_to": form.assigned_to,
            "created_by_name": form.creator.nome if form.creator else None,
            "assigned_to_name": form.assignee.nome if form.assignee else None,
            "created_at": form.created_at,
            "updated_at": form.updated_at,
        }

    # PUBLIC_INTERFACE
    async def get_form_or_404(self, form_id: int) -> Form8D:
        form = await self.repo.get_form(form_id)
        if not form:
            raise self.not_found("8D form")
        return form

    # PUBLIC_INTERFACE
    async def list_forms(self, *, status_filter: Optional[str] = None, severity: Optional[str] = None) -> List[Form8D]:
        return await self.repo.list_forms(status=status_filter, severity=severity)

    # PUBLIC_INTERFACE
    async def create_form(self, user: Usuario, payload: Form8DCreate) -> Form8D:
        _require_fields(
            title=payload.title,
            problem_description=payload.problem_description,
            problem_date=payload.problem_date,
        )
        self.require_choice("severity_level", payload.severity_level, SEVERITY_LEVELS)
        await self.require_user("assigned_to", payload.assigned_to)
        values = payload.model_dump()
        values.update(status="aberto", created_by=user.id)
        form = await self.repo.create_form(values)
        logger.info("8D form %s created by %s", form.id, user.username)
        return form

    # PUBLIC_INTERFACE
    async def update_form(self, form_id: int, payload: Form8DUpdate) -> Form8D:
        self.require_choice("severity_level", payload.severity_level, SEVERITY_LEVELS)
        self.require_choice("status", payload.status, FORM_STATUSES)
        await self.require_user("assigned_to", payload.assigned_to)
        form = await self.get_form_or_404(form_id)
        return await self.repo.update_form(form, payload.model_dump(exclude_unset=True))

    # PUBLIC_INTERFACE
    async def delete_form(self, form_id: int) -> None:
        await self.get_form_or_404(form_id)
        await self.repo.delete_form(form_id)
        logger.info("8D form %s deleted", form_id)

    # PUBLIC_INTERFACE
    async def detail(self, form_id: int) -> Dict[str, Any]:
        """Report with Ishikawa causes, five whys (or None) and action plans."""
        form = await self.get_form_or_404(form_id)
        data = self.to_read(form)
        data["ishikawa_analysis"] = await self.repo.list_ishikawa(form_id)
        data["five_whys_analysis"] = await self.repo.get_five_whys(form_id)
        data["action_plans"] = await self.repo.list_action_plans(form_id)
        return data

    # PUBLIC_INTERFACE
    async def disciplines(self, form_id: int, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """All eight disciplines merged with stored progress and the effective status."""
        await self.get_form_or_404(form_id)
        stored = {d.discipline_id: d for d in await self.repo.list_disciplines(form_id)}
        has_ishikawa = bool(await self.repo.list_ishikawa(form_id))
        five_whys = await self.repo.get_five_whys(form_id)

        result = []
        for discipline_id in DISCIPLINE_IDS:
            row = stored.get(discipline_id)
            item: Dict[str, Any] = {
                "discipline_id": discipline_id,
                **DISCIPLINE_TEMPLATES[discipline_id],
                "status": row.status if row else "pendente",
                "effective_status": effective_discipline_status(
                    discipline_id, row, has_ishikawa=has_ishikawa, five_whys=five_whys, today=today
                ),
            }
            if row:
                item.update(
                    id=row.id,
                    content=row.content,
                    responsible_person=row.responsible_person,
                    completion_date=row.completion_date,
                    comments=row.comments,
                    updated_at=row.updated_at,
                )
            result.append(item)
        return result

    # PUBLIC_INTERFACE
    async def update_discipline(self, form_id: int, discipline_id: str, payload: DisciplineUpdate) -> Form8DDiscipline:
        if discipline_id not in DISCIPLINE_IDS:
            raise self.bad_request("Unknown discipline")
        self.require_choice("status", payload.status, DISCIPLINE_STATUSES)
        await self.get_form_or_404(form_id)
        return await self.repo.upsert_discipline(form_id, discipline_id, payload.model_dump(exclude_unset=True))

    # Ishikawa
    # PUBLIC_INTERFACE
    async def add_ishikawa(self, form_id: int, payload: IshikawaCreate) -> IshikawaCause:
        _require_fields(category=payload.category, cause_description=payload.cause_description)
        self.require_choice("category", payload.category, ISHIKAWA_CATEGORIES)
        await self.get_form_or_404(form_id)
        return await self.repo.create_ishikawa({**payload.model_dump(), "form_8d_id": form_id})

    async def _ishikawa_or_404(self, cause_id: int) -> IshikawaCause:
        cause = await self.repo.get_ishikawa(cause_id)
        if not cause:
            raise self.not_found("Ishikawa cause")
        return cause

    # PUBLIC_INTERFACE
    async def update_ishikawa(self, cause_id: int, payload: IshikawaUpdate) -> IshikawaCause:
        self.require_choice("category", payload.category, ISHIKAWA_CATEGORIES)
        cause = await self._ishikawa_or_404(cause_id)
        return await self.repo.update_ishikawa(cause, payload.model_dump(exclude_unset=True))

    # PUBLIC_INTERFACE
    async def delete_ishikawa(self, cause_id: int) -> None:
        cause = await self._ishikawa_or_404(cause_id)
        await self.repo.delete(cause)

    # Five whys
    # PUBLIC_INTERFACE
    async def save_five_whys(self, form_id: int, payload: FiveWhysWrite) -> FiveWhysAnalysis:
        """Create or update the single five-whys analysis of a report."""
        await self.get_form_or_404(form_id)
        existing = await self.repo.get_five_whys(form_id)
        if existing is None:
            _require_fields(problem_statement=payload.problem_statement)
        return await self.repo.upsert_five_whys(form_id, payload.model_dump(exclude_unset=True))

    # Action plans
    # PUBLIC_INTERFACE
    async def add_action_plan(self, form_id: int, payload: ActionPlanCreate) -> ActionPlan:
        _require_fields(
            action_type=payload.action_type,
            action_description=payload.action_description,
            responsible_person=payload.responsible_person,
            due_date=payload.due_date,
        )
        self.require_choice("action_type", payload.action_type, ACTION_TYPES)
        self.require_choice("status", payload.status, ACTION_STATUSES)
        await self.get_form_or_404(form_id)
        return await self.repo.create_action_plan({**payload.model_dump(), "form_8d_id": form_id})

    async def _action_plan_or_404(self, plan_id: int) -> ActionPlan:
        plan = await self.repo.get_action_plan(plan_id)
        if not plan:
            raise self.not_found("Action plan")
        return plan

    # PUBLIC_INTERFACE
    async def update_action_plan(self, plan_id: int, payload: ActionPlanUpdate) -> ActionPlan:
        self.require_choice("action_type", payload.action_type, ACTION_TYPES)
        self.require_choice("status", payload.status, ACTION_STATUSES)
        plan = await self._action_plan_or_404(plan_id)
        return await self.repo.update_action_plan(plan, payload.model_dump(exclude_unset=True))

    # PUBLIC_INTERFACE
    async def delete_action_plan(self, plan_id: int) -> None:
        plan = await self._action_plan_or_404(plan_id)
        await self.repo.delete(plan)
