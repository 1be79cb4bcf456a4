"""
Paint consumption derived from painted parts and the consumption configuration.

The configuration document has these keys:
  - ppf: model/colour pairs offered on the production form
  - bases: per-colour base dilution rate
  - geral: general primer/base/varnish settings and fallbacks
  - modoTaxa: 'sobreTotal' when specific ml values are mixed totals
  - especificas: per (modelo, cor) ml per piece, stored as strings
"""

from __future__ import annotations

import copy
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

PRIMER_ONLY_COLOR = "Primer P&A"

COMPONENT_MODELS = (
    "Grade Virtus",
    "Grade Virtus GTS",
    "Aerofólio",
    "Spoiler",
    "Tera Friso DT",
    "Tera Friso TR",
)
POLAINA_LD = "Tera Polaina LD"
POLAINA_LE = "Tera Polaina LE"


def _specific(modelo: str, primer: str, verniz: str, bases: Sequence[Tuple[str, str]]) -> List[Dict[str, str]]:
    return [
        {"cor": cor, "base": base, "modelo": modelo, "primer": primer, "verniz": verniz}
        for cor, base in bases
    ]


_TERA_POLAINA_BASES = (
    ("Preto", "50.34"),
    ("Platinum", "71.29"),
    ("Branco", "81.71"),
    ("HyperNova", "80.50"),
    ("ClearWater", "71.53"),
    ("IceBird", "53.24"),
)

DEFAULT_CONFIGURATION: Dict[str, Any] = {
    "ppf": (
        [{"cor": cor, "modelo": modelo}
         for modelo in ("Polo PA DT", "Polo PA TR", "Polo Track DT", "Polo Track TR")
         for cor in ("Branco", "Prata", "Preto", "Platinum", "Vermelho")]
        + [{"cor": cor, "modelo": modelo}
           for modelo in ("Virtus DT", "Virtus TR")
           for cor in ("Branco", "Prata", "Preto", "Platinum", "Azul Biscay")]
        + [{"cor": cor, "modelo": modelo}
           for modelo in ("Tera DT", "Tera Polaina LD", "Tera Polaina LE")
           for cor in ("Branco", "Preto", "Platinum", "IceBird", "ClearWater", "HyperNova")]
        + [{"cor": "Preto", "modelo": modelo} for modelo in COMPONENT_MODELS]
    ),
    "bases": {
        "Prata": {"diluente": "Y", "taxa_diluicao": 39},
        "Preto": {"diluente": "Y", "taxa_diluicao": 41},
        "Branco": {"diluente": "Y", "taxa_diluicao": 28},
        "IceBird": {"diluente": "Y", "taxa_diluicao": 35},
        "Platinum": {"diluente": "Y", "taxa_diluicao": 30},
        "Vermelho": {"diluente": "Y", "taxa_diluicao": 26.9},
        "HyperNova": {"diluente": "Y", "taxa_diluicao": 37.5},
        "ClearWater": {"diluente": "Y", "taxa_diluicao": 33.6},
        "Azul Biscay": {"diluente": "Y", "taxa_diluicao": 32},
    },
    "geral": {
        "base": {"consumo": None, "diluente": "Y", "taxa_diluicao": 30, "taxa_catalisador": 0},
        "primer": {"consumo": None, "diluente": "X", "taxa_diluicao": 30, "taxa_catalisador": 0},
        "verniz": {"diluente": "Z", "volume_total": None, "taxa_diluicao": 14.4, "taxa_catalisador": 30},
    },
    "modoTaxa": "sobreTotal",
    "especificas": (
        _specific("Polo PA DT", "127.24", "186.27", (
            ("Prata", "268.67"), ("Branco", "324.24"), ("Preto", "160.53"),
            ("Platinum", "249.5"), ("Vermelho", "305.59"),
        ))
        + _specific("Polo PA TR", "114.50", "146.88", (
            ("Branco", "282.20"), ("Prata", "237.11"), ("Preto", "140.79"),
            ("Platinum", "218.51"), ("Vermelho", "258.02"),
        ))
        + _specific("Polo Track DT", "113.51", "164.17", (
            ("Branco", "306.05"), ("Prata", "237.52"), ("Preto", "147.86"),
            ("Platinum", "232.48"), ("Vermelho", ""),
        ))
        + _specific("Polo Track TR", "97.24", "139.38", (
            ("Branco", "253.25"), ("Prata", "219.22"), ("Preto", "122.68"),
            ("Platinum", "202.09"), ("Vermelho", ""),
        ))
        + _specific("Virtus DT", "102.44", "171.57", (
            ("Branco", "305.19"), ("Prata", "242.65"), ("Preto", "157.87"),
            ("Platinum", "204.13"), ("Azul Biscay", "197.87"),
        ))
        + _specific("Virtus TR", "113.54", "168.78", (
            ("Branco", "284.92"), ("Prata", "230.23"), ("Preto", "151.66"),
            ("Platinum", "205.57"), ("Azul Biscay", "198.89"),
        ))
        + _specific("Tera DT", "102.92", "161.02", (
            ("Branco", "253.97"), ("Preto", "137.21"), ("Platinum", "225.70"),
            ("IceBird", "193.37"), ("ClearWater", "206.20"),
        ))
        + _specific("Tera DT", "101.08", "157.92", (("HyperNova", "235.40"),))
        + _specific(POLAINA_LD, "35.99", "49.66", _TERA_POLAINA_BASES)
        + _specific(POLAINA_LE, "35.99", "49.66", tuple(
            (cor, "84.71" if cor == "Branco" else base) for cor, base in _TERA_POLAINA_BASES
        ))
        + _specific("Grade Virtus", "62.21", "123.76", (("Preto", "101.09"),))
        + _specific("Grade Virtus GTS", "74.17", "111.28", (("Preto", "107.00"),))
        + _specific("Aerofólio", "55.5", "85.00", (("Preto", "49.63"),))
        + _specific("Spoiler", "49.55", "76.10", (("Preto", "78.33"),))
        + _specific("Tera Friso DT", "29.76", "33.39", (("Preto", "27.28"),))
        + _specific("Tera Friso TR", "23.15", "41.30", (("Preto", "25.48"),))
    ),
}


# PUBLIC_INTERFACE
def default_configuration() -> Dict[str, Any]:
    """Return a deep copy of the built-in consumption configuration."""
    return copy.deepcopy(DEFAULT_CONFIGURATION)


def _ml(value: Any) -> float:
    """Parse an ml figure; blanks and non-numeric strings count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0.0


def _fmt(litres: float) -> str:
    return f"{litres:.2f}"


def _per_piece_ml(config: Mapping[str, Any], modelo: str, cor: str) -> Tuple[float, float, float]:
    """
    Mixed ml per piece (primer, base, varnish) for a model/colour.

    Lookup order: the specific entry, then the average of the same model's
    other colours, then the general settings.
    """
    especificas = config.get("especificas") or []
    geral = config.get("geral") or {}
    specific = next(
        (s for s in especificas if s.get("modelo") == modelo and s.get("cor") == cor), None
    )
    similar = [s for s in especificas if s.get("modelo") == modelo and s.get("cor") != cor]

    if cor == PRIMER_ONLY_COLOR:
        if specific is not None:
            return _ml(specific.get("primer")), 0.0, 0.0
        if similar:
            avg_total = _mean(
                _ml(s.get("primer")) + _ml(s.get("base")) + _ml(s.get("verniz")) for s in similar
            )
            return avg_total * 0.7, 0.0, 0.0
        return _ml((geral.get("primer") or {}).get("consumo")), 0.0, 0.0

    if specific is not None:
        return _ml(specific.get("primer")), _ml(specific.get("base")), _ml(specific.get("verniz"))
    if similar:
        return (
            _mean(_ml(s.get("primer")) for s in similar),
            _mean(_ml(s.get("base")) for s in similar),
            _mean(_ml(s.get("verniz")) for s in similar),
        )
    return (
        _ml((geral.get("primer") or {}).get("consumo")),
        _ml((geral.get("base") or {}).get("consumo")),
        _ml((geral.get("verniz") or {}).get("volume_total")),
    )


# PUBLIC_INTERFACE
def compute_material_consumption(
    items: Iterable[Mapping[str, Any]],
    config: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Compute paint consumption for the painted parts of a set of records.

    Parameters:
        items: producao entries ({modelo, cor, qtd, repintura}) in record order.
        config: consumption configuration; the built-in default when None.
    Returns:
        dict matching the materials summary response (litres).
    """
    if config is None:
        config = DEFAULT_CONFIGURATION
    geral = config.get("geral") or {}
    bases = config.get("bases") or {}
    over_total = config.get("modoTaxa") == "sobreTotal"

    total_pecas = total_choques = total_componentes = 0
    polaina_ld = polaina_le = 0

    primer_ml = base_ml = verniz_ml = 0.0
    dil_primer_ml = dil_base_ml = dil_verniz_ml = catalyst_ml = 0.0
    base_by_color: Dict[str, float] = defaultdict(float)
    by_model_color: Dict[Tuple[str, str], int] = defaultdict(int)
    by_color: Dict[str, int] = defaultdict(int)

    for item in items:
        modelo = item.get("modelo") or ""
        cor = item.get("cor") or ""
        qtd = int(item.get("qtd") or 0)

        if modelo == POLAINA_LD:
            polaina_ld += qtd
        elif modelo == POLAINA_LE:
            polaina_le += qtd
        if modelo in COMPONENT_MODELS:
            total_componentes += qtd
        elif modelo not in (POLAINA_LD, POLAINA_LE):
            total_choques += qtd
        total_pecas += qtd

        primer, base, verniz = (v * qtd for v in _per_piece_ml(config, modelo, cor))

        if over_total:
            primer_dil = primer * float((geral.get("primer") or {}).get("taxa_diluicao") or 0) / 100
            primer -= primer_dil

            color_base = bases.get(cor)
            base_rate = float(color_base.get("taxa_diluicao") or 0) / 100 if color_base else 0.0
            base_dil = base * base_rate
            base -= base_dil

            verniz_cfg = geral.get("verniz") or {}
            catalyst = verniz * float(verniz_cfg.get("taxa_catalisador") or 0) / 100
            verniz_dil = verniz * float(verniz_cfg.get("taxa_diluicao") or 0) / 100
            verniz = verniz - catalyst - verniz_dil

            dil_primer_ml += primer_dil
            dil_base_ml += base_dil
            dil_verniz_ml += verniz_dil
            catalyst_ml += catalyst

        primer_ml += primer
        base_ml += base
        verniz_ml += verniz

        if cor and cor != PRIMER_ONLY_COLOR and base > 0:
            base_by_color[cor] += base

        by_model_color[(modelo, cor)] += qtd
        by_color[cor] += qtd

    # One LD plus one LE polaina make up a bumper.
    total_choques += min(polaina_ld, polaina_le)

    to_l = 1 / 1000
    consumo_material = (primer_ml + base_ml + verniz_ml + catalyst_ml) * to_l
    consumo_diluentes = (dil_primer_ml + dil_base_ml + dil_verniz_ml) * to_l

    cores = sorted(
        ({"nome": nome, "consumo": _fmt(ml * to_l)} for nome, ml in base_by_color.items()),
        key=lambda c: float(c["consumo"]),
        reverse=True,
    )

    top_modelos = sorted(
        ({"modelo": m, "cor": c, "quantidade": q} for (m, c), q in by_model_color.items()),
        key=lambda x: x["quantidade"],
        reverse=True,
    )[:5]
    top_cores = sorted(
        ({"cor": c, "quantidade": q} for c, q in by_color.items()),
        key=lambda x: x["quantidade"],
        reverse=True,
    )[:10]
    by_model: Dict[str, int] = {}
    for (m, _), q in by_model_color.items():
        by_model[m] = by_model.get(m, 0) + q
    top_modelos_grafico = sorted(
        ({"modelo": m, "quantidade": q} for m, q in by_model.items()),
        key=lambda x: x["quantidade"],
        reverse=True,
    )[:10]

    logger.debug("Consumption computed for %d painted parts", total_pecas)
    return {
        "totalPecasPintadas": total_pecas,
        "totalChoques": total_choques,
        "totalComponentes": total_componentes,
        "consumoTotalMaterial": round(consumo_material, 2),
        "consumoTotalDiluentes": round(consumo_diluentes, 2),
        "consumoDetalhado": {
            "primer": _fmt(primer_ml * to_l),
            "base": _fmt(base_ml * to_l),
            "verniz": _fmt(verniz_ml * to_l),
            "cores": cores,
            "catalisador": _fmt(catalyst_ml * to_l),
            "diluentePrimer": _fmt(dil_primer_ml * to_l),
            "diluenteBase": _fmt(dil_base_ml * to_l),
            "diluenteVerniz": _fmt(dil_verniz_ml * to_l),
        },
        "topModelos": top_modelos,
        "topCores": top_cores,
        "topModelosGrafico": top_modelos_grafico,
    }


DEFAULT_MATERIAL_SETTINGS: Tuple[Dict[str, Any], ...] = (
    {"material_name": "primer", "dilution_rate": 10, "diluent_type": "diluente_primer", "catalyst_rate": 0},
    {"material_name": "branco", "dilution_rate": 15, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "preto", "dilution_rate": 12, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "platinum", "dilution_rate": 18, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "prata_sirius", "dilution_rate": 20, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "hypernova", "dilution_rate": 16, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "clearwater", "dilution_rate": 14, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "icebird", "dilution_rate": 17, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "azul_biscay", "dilution_rate": 13, "diluent_type": "diluente_base", "catalyst_rate": 0},
    {"material_name": "verniz", "dilution_rate": 25, "diluent_type": "diluente_verniz", "catalyst_rate": 8},
)
