from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select

from paintshop.db.models.quality import (
    ActionPlan,
    FiveWhysAnalysis,
    Form8D,
    Form8DDiscipline,
    IshikawaCause,
)
from .base import BaseRepository


def _apply(entity: Any, values: Dict[str, Any]) -> None:
    for key, value in values.items():
        if value is not None:
            setattr(entity, key, value)


class Form8DRepository(BaseRepository):
    """Repository for 8D reports and their analyses."""

    # Forms
    async def list_forms(self, *, status: Optional[str] = None, severity: Optional[str] = None) -> List[Form8D]:
        stmt = select(Form8D)
        if status:
            stmt = stmt.where(Form8D.status == status)
        if severity:
            stmt = stmt.where(Form8D.severity_level == severity)
        stmt = stmt.order_by(Form8D.created_at.desc(), Form8D.id.desc())
        res = await self.scalars(stmt)
        return list(res)

    async def get_form(self, form_id: int) -> Optional[Form8D]:
        stmt = select(Form8D).where(Form8D.id == form_id).execution_options(populate_existing=True)
        return await self.scalar_one_or_none(stmt)

    async def create_form(self, values: Dict[str, Any]) -> Form8D:
        form = Form8D(**values)
        await self.add(form)
        await self.commit()
        return await self.get_form(form.id)  # type: ignore

    async def update_form(self, form: Form8D, values: Dict[str, Any]) -> Form8D:
        _apply(form, values)
        await self.commit()
        return await self.get_form(form.id)  # type: ignore

    async def delete_form(self, form_id: int) -> int:
        res = await self.execute(delete(Form8D).where(Form8D.id == form_id))
        await self.commit()
        return int(res.rowcount or 0)

    # Disciplines
    async def list_disciplines(self, form_id: int) -> List[Form8DDiscipline]:
        stmt = (
            select(Form8DDiscipline)
            .where(Form8DDiscipline.form_8d_id == form_id)
            .order_by(Form8DDiscipline.discipline_id)
        )
        res = await self.scalars(stmt)
        return list(res)

    async def upsert_discipline(self, form_id: int, discipline_id: str, values: Dict[str, Any]) -> Form8DDiscipline:
        stmt = select(Form8DDiscipline).where(
            Form8DDiscipline.form_8d_id == form_id,
            Form8DDiscipline.discipline_id == discipline_id,
        )
        row = await self.scalar_one_or_none(stmt)
        if row is None:
            row = Form8DDiscipline(form_8d_id=form_id, discipline_id=discipline_id)
            await self.add(row)
        _apply(row, values)
        return await self.save(row)

    # Ishikawa
    async def list_ishikawa(self, form_id: int) -> List[IshikawaCause]:
        stmt = (
            select(IshikawaCause)
            .where(IshikawaCause.form_8d_id == form_id)
            .order_by(IshikawaCause.category, IshikawaCause.id)
        )
        res = await self.scalars(stmt)
        return list(res)

    async def get_ishikawa(self, cause_id: int) -> Optional[IshikawaCause]:
        stmt = select(IshikawaCause).where(IshikawaCause.id == cause_id)
        return await self.scalar_one_or_none(stmt)

    async def create_ishikawa(self, values: Dict[str, Any]) -> IshikawaCause:
        cause = IshikawaCause(**values)
        return await self.save(cause, new=True)

    async def update_ishikawa(self, cause: IshikawaCause, values: Dict[str, Any]) -> IshikawaCause:
        _apply(cause, values)
        return await self.save(cause)

    # Five whys
    async def get_five_whys(self, form_id: int) -> Optional[FiveWhysAnalysis]:
        stmt = select(FiveWhysAnalysis).where(FiveWhysAnalysis.form_8d_id == form_id)
        return await self.scalar_one_or_none(stmt)

    async def upsert_five_whys(self, form_id: int, values: Dict[str, Any]) -> FiveWhysAnalysis:
        row = await self.get_five_whys(form_id)
        if row is None:
            row = FiveWhysAnalysis(form_8d_id=form_id)
            await self.add(row)
        _apply(row, values)
        return await self.save(row)

    # Action plans
    async def list_action_plans(self, form_id: int) -> List[ActionPlan]:
        stmt = (
            select(ActionPlan)
            .where(ActionPlan.form_8d_id == form_id)
            .order_by(ActionPlan.due_date, ActionPlan.id)
        )
        res = await self.scalars(stmt)
        return list(res)

    async def get_action_plan(self, plan_id: int) -> Optional[ActionPlan]:
        stmt = select(ActionPlan).where(ActionPlan.id == plan_id)
        return await self.scalar_one_or_none(stmt)

    async def create_action_plan(self, values: Dict[str, Any]) -> ActionPlan:
        plan = ActionPlan(**values)
        return await self.save(plan, new=True)

    async def update_action_plan(self, plan: ActionPlan, values: Dict[str, Any]) -> ActionPlan:
        _apply(plan, values)
        return await self.save(plan)
