"""
Classification rules for hourly slots and downtime reasons.

Slots are labelled "HHhMM - HHhMM"; the first HHhMM is the slot start. Shifts:
  - 1: start hour 06..14
  - 2: start hour 15..23
  - 3: start hour 00..05
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

_SLOT_START = re.compile(r"(\d{2})h(\d{2})")

SHIFT_HOURS: Dict[str, range] = {
    "1": range(6, 15),
    "2": range(15, 24),
    "3": range(0, 6),
}

DOWNTIME_REASONS_BY_AREA: Dict[str, Tuple[str, ...]] = {
    "ENGENHARIA": (
        "TESTE DE ENGENHARIA",
        "LIMITE DE EIXO",
    ),
    "GESTÃO": (
        "FALTA DE FERRAMENTAS",
        "FALTA DE OPERADOR NA CARGA",
        "FALTA DE PEÇAS DA PREPARAÇÃO",
        "OPERADOR BUSCANDO PEÇA NO ALMOXARIFADO",
        "OPERADOR NA ENFERMARIA",
        "ORGANIZAÇÃO GERAL NO SETOR",
        "PARADA NA CABINE",
        "PARADA NA CARGA - ABASTECENDO A LINHA",
        "PARADA NA DESCARGA - DESCARREGANDO PEÇAS",
        "PARADA EXTERNA",
        "REFEIÇÃO",
        "REGULAGEM DE MÁQUINA",
        "RETRABALHO / LIMPEZA DE PEÇAS",
        "REUNIÃO COM A DIRETORIA",
        "REUNIÃO",
        "TREINAMENTO",
        "TROCA DE TURNO",
    ),
    "LOGÍSTICA": (
        "AGUARDANDO A PROGRAMAÇÃO",
        "FALHA RFID",
        "FALTA DE ABASTECIMENTO DE RACK",
        "FALTA DE EMBALAGEM DA LOGÍSTICA",
        "FALTA DE EMPILHADOR DA LOGÍSTICA ABASTECENDO PEÇAS",
        "FALTA DE MATÉRIA PRIMA (TINTA / VERNIZ)",
        "FALTA DE PEÇAS DO ALMOXARIFADO (REQUISITADO)",
        "FALTA DE PEÇAS INJETADAS",
        "PARADA PROGRAMADA",
    ),
    "MANUTENÇÃO": (
        "AGUARDANDO A MANUTENÇÃO",
        "CABINE DESBALANCEADA",
        "CORRENTE QUEBRADA",
        "FALHA NO ELEVADOR",
        "FALTA AR COMPRIMIDO",
        "FALTA DE ENERGIA",
        "MANGUEIRA ENTUPIDA",
        "MANGUEIRA VAZANDO",
        "MANUTENÇÃO CORRETIVA",
        "SKID TRAVADO",
        "MANUTENÇÃO ELÉTRICA",
        "MANUTENÇÃO MECÂNICA",
        "MANUTENÇÃO PREDIAL",
        "MANUTENÇÃO PREVENTIVA",
        "MANUTENÇÃO SERRALHERIA",
        "PROBLEMA NO ROBÔ CAB. FLAMAGEM",
        "PROBLEMA NO ROBÔ CAB. PRIMER",
        "PROBLEMA NO ROBÔ CAB. BASE",
        "PROBLEMA NO ROBÔ CAB. VERNIZ",
        "PROBLEMA NO MAÇARICO",
        "PROBLEMA NO MOTOR / CORREIA",
        "PROBLEMA NO POWER WASH",
    ),
    "MILCLEAN": (
        "AGUARDANDO OPERADOR PARA LIMPEZA",
    ),
    "PRODUÇÃO": (
        "FALTA DE OPERADOR",
        "FIM DE EXPEDIENTE",
        "LIMPEZA DE MÁQUINA",
        "PAUSA",
        "TROCA DE PEÇAS",
        "TROCA DE SETUP",
    ),
    "QUALIDADE": (
        "ESPERANDO LIBERAÇÃO DA QUALIDADE",
    ),
    "SETUP": (
        "SETUP DE COR",
        "TROCA DE MODELO",
    ),
    "PINTURA": (
        "LIMPEZA DA CABINE",
        "GAP PARA LIMPEZA NA CABINE",
        "LIMPEZA CONJUNTO ECOBELL",
        "GAP NA FLAMAGEM",
    ),
    "SEGURANÇA": (
        "ACIDENTE / INCIDENTE",
        "INSPEÇÃO DE SEGURANÇA",
    ),
}

DEFAULT_AREA = "OUTROS"

_AREA_BY_REASON: Dict[str, str] = {
    reason: area for area, reasons in DOWNTIME_REASONS_BY_AREA.items() for reason in reasons
}

# Planned stops kept out of the downtime KPIs (substring match on the upper-cased type).
EXCLUDED_DOWNTIME_TYPES: Tuple[str, ...] = ("LIMPEZA DA CABINE", "REFEIÇÃO", "REFEICAO")

MAINTENANCE_CRITERIO = "MANUTENÇÃO"

CRITERIO_AREA_LABELS: Dict[str, str] = {
    "MANUTENÇÃO": "🔧 Manutenção",
    "MANUTENCAO": "🔧 Manutenção",
    "PINTURA": "🎨 Pintura",
    "SETUP": "⚙️ Setup",
    "GESTÃO": "👥 Gestão",
    "GESTAO": "👥 Gestão",
    "ENGENHARIA": "📋 Engenharia",
    "QUALIDADE": "🛡️ Qualidade",
    "LOGÍSTICA": "📦 Logística",
    "LOGISTICA": "📦 Logística",
}
OTHER_AREA_LABEL = "❓ Outros"

# Checked in order when a stop carries no criterio.
_AREA_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("🔧 Manutenção", ("ROBÔ", "ROBOT", "TRAVADO", "PROBLEMA", "DEFEITO", "FALHA", "QUEBRA", "CAB. BASE", "CABINE")),
    ("📋 Engenharia", ("LIMITE DE EIXO", "LIMITE", "EIXO", "PRIMER")),
    ("👥 Gestão", ("PARADA EXTERNA", "EXTERNA", "REFEIÇÃO", "REFEICAO")),
    ("🎨 Pintura", ("GAP NA FLAMAGEM", "FLAMAGEM", "TINTA", "PRIMER", "COR")),
    ("⚙️ Setup", ("SETUP", "SETUP DE COR", "TROCA")),
)


# PUBLIC_INTERFACE
def parse_slot_start(hora: Optional[str]) -> Optional[Tuple[int, int]]:
    """Return (hour, minute) of the slot start, or None when the label has no HHhMM."""
    if not hora:
        return None
    match = _SLOT_START.search(hora)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


# PUBLIC_INTERFACE
def slot_start_hour(hora: Optional[str]) -> Optional[int]:
    """Return the slot start hour, or None when it cannot be parsed."""
    start = parse_slot_start(hora)
    return start[0] if start else None


# PUBLIC_INTERFACE
def matches_shift(hora: Optional[str], shift: Optional[str]) -> bool:
    """
    Decide whether a slot belongs to the requested shift filter.

    No filter ('all', empty or an unknown value) keeps every slot; with a
    known shift, slots whose start hour cannot be parsed are dropped.
    """
    if not shift or shift == "all":
        return True
    hours = SHIFT_HOURS.get(shift)
    if hours is None:
        return True
    hour = slot_start_hour(hora)
    if hour is None:
        return False
    return hour in hours


# PUBLIC_INTERFACE
def shift_label(hora: Optional[str]) -> str:
    """Return 'Turno 1', 'Turno 2' or 'Turno 3' for a slot, 'N/A' when it cannot be parsed."""
    hour = slot_start_hour(hora)
    if hour is None:
        return "N/A"
    if 0 <= hour < 6:
        return "Turno 3"
    if 6 <= hour < 15:
        return "Turno 1"
    return "Turno 2"


# PUBLIC_INTERFACE
def area_for_reason(reason: Optional[str]) -> str:
    """Map a downtime reason to its responsible area; unknown reasons map to OUTROS."""
    return _AREA_BY_REASON.get(reason or "", DEFAULT_AREA)


# PUBLIC_INTERFACE
def is_excluded_downtime(tipo: Optional[str]) -> bool:
    """True for planned stops (meals, booth cleaning) that do not count as downtime."""
    normalized = (tipo or "").upper()
    return any(excluded in normalized for excluded in EXCLUDED_DOWNTIME_TYPES)


# PUBLIC_INTERFACE
def area_label(criterio: Optional[str], tipo: Optional[str]) -> str:
    """
    Area label used by the downtime-by-area chart.

    A filled criterio is looked up directly; an empty one falls back to
    keyword matching on the downtime type.
    """
    if criterio and criterio.strip():
        return CRITERIO_AREA_LABELS.get(criterio.upper(), OTHER_AREA_LABEL)
    normalized = (tipo or "").upper()
    for label, keywords in _AREA_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return label
    return OTHER_AREA_LABEL
