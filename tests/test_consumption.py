"""Paint consumption derived from painted parts."""

from paintshop.services.consumption import (
    DEFAULT_CONFIGURATION,
    compute_material_consumption,
    default_configuration,
)


def _config(modo="sobreTotal"):
    return {
        "bases": {"Preto": {"diluente": "Y", "taxa_diluicao": 50}},
        "geral": {
            "primer": {"consumo": None, "taxa_diluicao": 10},
            "base": {"consumo": None, "taxa_diluicao": 30},
            "verniz": {"volume_total": None, "taxa_diluicao": 10, "taxa_catalisador": 20},
        },
        "modoTaxa": modo,
        "especificas": [
            {"modelo": "Modelo X", "cor": "Preto", "primer": "100", "base": "200", "verniz": "300"},
        ],
    }


def _item(modelo, cor, qtd):
    return {"modelo": modelo, "cor": cor, "qtd": qtd, "repintura": False}


def test_rates_over_total_split_diluent_and_catalyst():
    result = compute_material_consumption([_item("Modelo X", "Preto", 10)], _config())

    assert result["totalPecasPintadas"] == 10
    assert result["totalChoques"] == 10
    assert result["totalComponentes"] == 0
    assert result["consumoTotalMaterial"] == 4.6
    assert result["consumoTotalDiluentes"] == 1.4
    detail = result["consumoDetalhado"]
    assert detail["primer"] == "0.90"
    assert detail["base"] == "1.00"
    assert detail["verniz"] == "2.10"
    assert detail["catalisador"] == "0.60"
    assert detail["diluentePrimer"] == "0.10"
    assert detail["diluenteBase"] == "1.00"
    assert detail["diluenteVerniz"] == "0.30"
    assert detail["cores"] == [{"nome": "Preto", "consumo": "1.00"}]


def test_other_rate_mode_keeps_raw_totals():
    result = compute_material_consumption([_item("Modelo X", "Preto", 10)], _config(modo="porComponente"))
    detail = result["consumoDetalhado"]
    assert detail["primer"] == "1.00"
    assert detail["base"] == "2.00"
    assert detail["verniz"] == "3.00"
    assert detail["catalisador"] == "0.00"
    assert result["consumoTotalDiluentes"] == 0


def test_unknown_colour_uses_average_of_same_model():
    result = compute_material_consumption([_item("Modelo X", "Branco", 1)], _config(modo="porComponente"))
    detail = result["consumoDetalhado"]
    assert (detail["primer"], detail["base"], detail["verniz"]) == ("0.10", "0.20", "0.30")


def test_primer_only_colour_uses_share_of_similar_total():
    result = compute_material_consumption([_item("Modelo X", "Primer P&A", 10)], _config(modo="porComponente"))
    detail = result["consumoDetalhado"]
    assert detail["primer"] == "4.20"
    assert detail["base"] == "0.00"
    assert detail["cores"] == []


def test_unknown_model_falls_back_to_general_settings():
    config = _config(modo="porComponente")
    config["geral"]["primer"]["consumo"] = "50"
    config["geral"]["base"]["consumo"] = 60
    config["geral"]["verniz"]["volume_total"] = "70"
    result = compute_material_consumption([_item("Outro", "Azul", 10)], config)
    detail = result["consumoDetalhado"]
    assert (detail["primer"], detail["base"], detail["verniz"]) == ("0.50", "0.60", "0.70")


def test_polainas_pair_into_bumpers_and_components_counted():
    items = [
        _item("Tera Polaina LD", "Preto", 3),
        _item("Tera Polaina LE", "Preto", 2),
        _item("Spoiler", "Preto", 4),
    ]
    result = compute_material_consumption(items)
    assert result["totalPecasPintadas"] == 9
    assert result["totalChoques"] == 2
    assert result["totalComponentes"] == 4


def test_blank_specific_value_counts_as_zero():
    result = compute_material_consumption([_item("Polo Track DT", "Vermelho", 1)])
    assert result["consumoDetalhado"]["base"] == "0.00"
    assert result["consumoDetalhado"]["cores"] == []
    assert float(result["consumoDetalhado"]["primer"]) > 0


def test_top_lists():
    items = [_item("Spoiler", "Preto", 4), _item("Aerofólio", "Preto", 6), _item("Spoiler", "Preto", 1)]
    result = compute_material_consumption(items)
    assert result["topModelos"][0] == {"modelo": "Aerofólio", "cor": "Preto", "quantidade": 6}
    assert result["topCores"] == [{"cor": "Preto", "quantidade": 11}]
    assert result["topModelosGrafico"] == [
        {"modelo": "Aerofólio", "quantidade": 6},
        {"modelo": "Spoiler", "quantidade": 5},
    ]


def test_no_items_yields_zeroes():
    result = compute_material_consumption([])
    assert result["totalPecasPintadas"] == 0
    assert result["consumoTotalMaterial"] == 0
    assert result["consumoDetalhado"]["primer"] == "0.00"
    assert result["topModelos"] == []


def test_default_configuration_is_a_copy():
    config = default_configuration()
    config["bases"]["Preto"]["taxa_diluicao"] = 0
    assert DEFAULT_CONFIGURATION["bases"]["Preto"]["taxa_diluicao"] == 41
