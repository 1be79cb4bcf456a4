from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import get_current_user, require_roles
from paintshop.db.session import get_async_session
from paintshop.schemas.common import SuccessResponse
from paintshop.schemas.quality import (
    ActionPlanCreate,
    ActionPlanRead,
    ActionPlanUpdate,
    DisciplineRead,
    DisciplineUpdate,
    FiveWhysRead,
    FiveWhysWrite,
    Form8DCreate,
    Form8DDetail,
    Form8DRead,
    Form8DUpdate,
    IshikawaCreate,
    IshikawaRead,
    IshikawaUpdate,
)
from paintshop.services.quality import Form8DService

router = APIRouter(tags=["Quality"], dependencies=[Depends(get_current_user)])


# PUBLIC_INTERFACE
@router.get(
    "/forms-8d",
    response_model=List[Form8DRead],
    summary="List 8D reports",
    description="List reports newest first, optionally filtered by status and severity.",
)
async def list_forms(
    session: AsyncSession = Depends(get_async_session),
    status_filter: Optional[str] = Query(None, alias="status"),
    severity: Optional[str] = Query(None, description="baixa, media, alta or critica"),
) -> List[Form8DRead]:
    svc = Form8DService(session)
    forms = await svc.list_forms(status_filter=status_filter, severity=severity)
    return [Form8DRead(**svc.to_read(f)) for f in forms]


# PUBLIC_INTERFACE
@router.post(
    "/forms-8d",
    response_model=Form8DRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create 8D report",
)
async def create_form(
    payload: Form8DCreate,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
) -> Form8DRead:
    svc = Form8DService(session)
    return Form8DRead(**svc.to_read(await svc.create_form(user, payload)))


# PUBLIC_INTERFACE
@router.get(
    "/forms-8d/{form_id}",
    response_model=Form8DDetail,
    summary="Get 8D report",
    description="Report with its Ishikawa causes, five whys analysis and action plans.",
)
async def get_form(
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> Form8DDetail:
    data = await Form8DService(session).detail(form_id)
    five_whys = data["five_whys_analysis"]
    data.update(
        ishikawa_analysis=[IshikawaRead.model_validate(x) for x in data["ishikawa_analysis"]],
        five_whys_analysis=FiveWhysRead.model_validate(five_whys) if five_whys else None,
        action_plans=[ActionPlanRead.model_validate(x) for x in data["action_plans"]],
    )
    return Form8DDetail(**data)


# PUBLIC_INTERFACE
@router.put("/forms-8d/{form_id}", response_model=Form8DRead, summary="Update 8D report")
async def update_form(
    payload: Form8DUpdate,
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> Form8DRead:
    svc = Form8DService(session)
    return Form8DRead(**svc.to_read(await svc.update_form(form_id, payload)))


# PUBLIC_INTERFACE
@router.delete(
    "/forms-8d/{form_id}",
    response_model=SuccessResponse,
    summary="Delete 8D report",
    dependencies=[Depends(require_roles("admin", "manager"))],
)
async def delete_form(
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    await Form8DService(session).delete_form(form_id)
    return SuccessResponse(message="8D form deleted")


# PUBLIC_INTERFACE
@router.get(
    "/forms-8d/{form_id}/disciplines",
    response_model=List[DisciplineRead],
    summary="List disciplines",
    description="D1..D8 with stored progress and the status after automatic rules.",
)
async def list_disciplines(
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> List[DisciplineRead]:
    return [DisciplineRead(**d) for d in await Form8DService(session).disciplines(form_id)]


# PUBLIC_INTERFACE
@router.put(
    "/forms-8d/{form_id}/disciplines/{discipline_id}",
    response_model=SuccessResponse,
    summary="Update discipline",
)
async def update_discipline(
    payload: DisciplineUpdate,
    form_id: int = Path(...),
    discipline_id: str = Path(..., description="D1..D8"),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    await Form8DService(session).update_discipline(form_id, discipline_id, payload)
    return SuccessResponse(message=f"{discipline_id} updated")


# PUBLIC_INTERFACE
@router.post(
    "/forms-8d/{form_id}/ishikawa",
    response_model=IshikawaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Ishikawa cause",
)
async def add_ishikawa(
    payload: IshikawaCreate,
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> IshikawaRead:
    return IshikawaRead.model_validate(await Form8DService(session).add_ishikawa(form_id, payload))


# PUBLIC_INTERFACE
@router.put("/ishikawa/{cause_id}", response_model=IshikawaRead, summary="Update Ishikawa cause")
async def update_ishikawa(
    payload: IshikawaUpdate,
    cause_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> IshikawaRead:
    return IshikawaRead.model_validate(await Form8DService(session).update_ishikawa(cause_id, payload))


# PUBLIC_INTERFACE
@router.delete("/ishikawa/{cause_id}", response_model=SuccessResponse, summary="Delete Ishikawa cause")
async def delete_ishikawa(
    cause_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    await Form8DService(session).delete_ishikawa(cause_id)
    return SuccessResponse(message="Cause deleted")


# PUBLIC_INTERFACE
@router.post("/forms-8d/{form_id}/five-whys", response_model=FiveWhysRead, summary="Save five whys analysis")
@router.put("/forms-8d/{form_id}/five-whys", response_model=FiveWhysRead, summary="Save five whys analysis")
async def save_five_whys(
    payload: FiveWhysWrite,
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> FiveWhysRead:
    return FiveWhysRead.model_validate(await Form8DService(session).save_five_whys(form_id, payload))


# PUBLIC_INTERFACE
@router.post(
    "/forms-8d/{form_id}/action-plans",
    response_model=ActionPlanRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add action plan",
)
async def add_action_plan(
    payload: ActionPlanCreate,
    form_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> ActionPlanRead:
    return ActionPlanRead.model_validate(await Form8DService(session).add_action_plan(form_id, payload))


# PUBLIC_INTERFACE
@router.put("/action-plans/{plan_id}", response_model=ActionPlanRead, summary="Update action plan")
async def update_action_plan(
    payload: ActionPlanUpdate,
    plan_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> ActionPlanRead:
    return ActionPlanRead.model_validate(await Form8DService(session).update_action_plan(plan_id, payload))


# PUBLIC_INTERFACE
@router.delete("/action-plans/{plan_id}", response_model=SuccessResponse, summary="Delete action plan")
async def delete_action_plan(
    plan_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    await Form8DService(session).delete_action_plan(plan_id)
    return SuccessResponse(message="Action plan deleted")
