"""
Unit tests for corridor name variants.
"""

import json

from street_sweep.variants import DEFAULT_VARIANT_RULES, VariantRule, corridor_variants, load_variant_rules

from conftest import ROOT


def test_default_variants():
    assert corridor_variants("25TH", "AVE") == ["25TH", "25TH AVE", "25th", "25th AVE"]


def test_variants_without_type_are_deduplicated():
    assert corridor_variants("MARKET", "") == ["MARKET"]


def test_empty_street_gives_no_variants():
    assert corridor_variants("", "") == []


def test_only_first_occurrence_is_replaced():
    rule = VariantRule("lower", replace=(("TH", "th"),))
    assert rule.apply("SMITH 4TH", "") == "SMIth 4TH"


def test_shipped_rules_match_defaults():
    assert load_variant_rules(ROOT / "data" / "corridor_variants.json") == DEFAULT_VARIANT_RULES


def test_rules_are_extensible_from_file(tmp_path):
    p = tmp_path / "rules.json"
    p.write_text(json.dumps([
        {"name": "raw"},
        {"name": "title_st", "replace": [["ST$", "St"]], "append_type": False},
    ]), encoding="utf-8")
    rules = load_variant_rules(p)
    assert corridor_variants("HOWARD ST", "", rules) == ["HOWARD ST", "HOWARD St"]


def test_no_path_uses_defaults():
    assert load_variant_rules(None) == DEFAULT_VARIANT_RULES
