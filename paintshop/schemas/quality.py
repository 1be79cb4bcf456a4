from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class Form8DCreate(BaseModel):
    """New 8D report; title, description and problem date are required."""
    title: Optional[str] = Field(None)
    problem_description: Optional[str] = Field(None)
    team_members: List[str] = Field(default_factory=list)
    problem_date: Optional[date] = Field(None)
    detection_date: Optional[date] = Field(None)
    customer_impact: Optional[str] = Field(None)
    severity_level: str = Field("media", description="baixa, media, alta or critica")
    assigned_to: Optional[UUID] = Field(None)


class Form8DUpdate(BaseModel):
    title: Optional[str] = Field(None)
    problem_description: Optional[str] = Field(None)
    team_members: Optional[List[str]] = Field(None)
    problem_date: Optional[date] = Field(None)
    detection_date: Optional[date] = Field(None)
    customer_impact: Optional[str] = Field(None)
    severity_level: Optional[str] = Field(None)
    status: Optional[str] = Field(None, description="aberto, em_andamento, concluido or cancelado")
    assigned_to: Optional[UUID] = Field(None)


class Form8DRead(BaseModel):
    id: int = Field(...)
    title: str = Field(...)
    problem_description: str = Field(...)
    team_members: List[str] = Field(default_factory=list)
    problem_date: date = Field(...)
    detection_date: Optional[date] = Field(None)
    customer_impact: Optional[str] = Field(None)
    severity_level: str = Field(...)
    status: str = Field(...)
    created_by: Optional[UUID] = Field(None)
    assigned_to: Optional[UUID] = Field(None)
    created_by_name: Optional[str] = Field(None)
    assigned_to_name: Optional[str] = Field(None)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)


class IshikawaCreate(BaseModel):
    category: Optional[str] = Field(None, description="One of the 6M categories")
    cause_description: Optional[str] = Field(None)
    subcause_description: Optional[str] = Field(None)
    impact_level: int = Field(3, ge=1, le=5)


class IshikawaUpdate(BaseModel):
    category: Optional[str] = Field(None)
    cause_description: Optional[str] = Field(None)
    subcause_description: Optional[str] = Field(None)
    impact_level: Optional[int] = Field(None, ge=1, le=5)


class IshikawaRead(BaseModel):
    id: int
    form_8d_id: int
    category: str
    cause_description: str
    subcause_description: Optional[str] = None
    impact_level: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FiveWhysWrite(BaseModel):
    problem_statement: Optional[str] = Field(None)
    why_1: Optional[str] = Field(None)
    why_2: Optional[str] = Field(None)
    why_3: Optional[str] = Field(None)
    why_4: Optional[str] = Field(None)
    why_5: Optional[str] = Field(None)
    root_cause: Optional[str] = Field(None)


class FiveWhysRead(BaseModel):
    id: int
    form_8d_id: int
    problem_statement: str
    why_1: Optional[str] = None
    why_2: Optional[str] = None
    why_3: Optional[str] = None
    why_4: Optional[str] = None
    why_5: Optional[str] = None
    root_cause: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActionPlanCreate(BaseModel):
    action_type: Optional[str] = Field(None, description="imediata, corretiva or preventiva")
    action_description: Optional[str] = Field(None)
    responsible_person: Optional[str] = Field(None)
    due_date: Optional[date] = Field(None)
    status: str = Field("pendente")
    completion_date: Optional[date] = Field(None)
    verification_method: Optional[str] = Field(None)
    effectiveness_check: Optional[str] = Field(None)
    comments: Optional[str] = Field(None)


class ActionPlanUpdate(BaseModel):
    action_type: Optional[str] = Field(None)
    action_description: Optional[str] = Field(None)
    responsible_person: Optional[str] = Field(None)
    due_date: Optional[date] = Field(None)
    status: Optional[str] = Field(None)
    completion_date: Optional[date] = Field(None)
    verification_method: Optional[str] = Field(None)
    effectiveness_check: Optional[str] = Field(None)
    comments: Optional[str] = Field(None)


class ActionPlanRead(BaseModel):
    id: int
    form_8d_id: int
    action_type: str
    action_description: str
    responsible_person: str
    due_date: date
    status: str
    completion_date: Optional[date] = None
    verification_method: Optional[str] = None
    effectiveness_check: Optional[str] = None
    comments: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class Form8DDetail(Form8DRead):
    """Report with its analyses and action plans."""
    ishikawa_analysis: List[IshikawaRead] = Field(default_factory=list)
    five_whys_analysis: Optional[FiveWhysRead] = Field(None)
    action_plans: List[ActionPlanRead] = Field(default_factory=list)


class DisciplineUpdate(BaseModel):
    status: Optional[str] = Field(None, description="pendente, em_andamento or concluida")
    content: Optional[str] = Field(None)
    responsible_person: Optional[str] = Field(None)
    completion_date: Optional[date] = Field(None)
    comments: Optional[str] = Field(None)


class DisciplineRead(BaseModel):
    """One of D1..D8 merged with its stored progress, if any."""
    discipline_id: str
    title: str
    description: str
    status: str = Field(..., description="Stored status, pendente when never saved")
    effective_status: str = Field(..., description="Status after automatic rules (may be atrasada)")
    id: Optional[int] = None
    content: Optional[str] = None
    responsible_person: Optional[str] = None
    completion_date: Optional[date] = None
    comments: Optional[str] = None
    updated_at: Optional[datetime] = None
