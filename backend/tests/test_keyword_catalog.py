import json

import pytest

from services.keyword_catalog import CatalogLoadError, KeywordCatalog


def test_every_alias_resolves_to_a_canonical_that_covers_it(catalog):
    for alias in catalog.aliases():
        canonical = catalog.canonical_of(alias)
        assert canonical is not None
        assert alias in catalog.all_forms_of(canonical)


def test_multi_word_skills_sorted_longest_first(catalog):
    skills = catalog.multi_word_skills()
    assert skills
    for longer, shorter in zip(skills, skills[1:]):
        assert len(longer) >= len(shorter)


def test_synonyms_resolve_to_canonical(catalog):
    assert catalog.canonical_of("aws") == "Amazon Web Services"
    assert catalog.canonical_of("ReactJS") == "React"
    assert catalog.canonical_of("k8s") == "Kubernetes"
    assert catalog.canonical_of("definitely-not-a-skill") is None


def test_all_forms_of_includes_canonical_and_synonyms(catalog):
    forms = catalog.all_forms_of("Node.js")
    assert {"node.js", "nodejs", "node"} <= forms


def test_all_forms_of_unknown_returns_itself(catalog):
    assert catalog.all_forms_of("Cobol 85") == frozenset({"cobol 85"})


def test_cased_form_upgrades_lowercase_registration():
    catalog = KeywordCatalog.from_dict({
        "skillCategories": {"Cloud": ["aws"]},
        "synonymMap": {"Amazon Web Services": ["AWS"]},
    })
    assert catalog.display_form_of("aws") == "AWS"


def test_first_cased_registration_wins():
    catalog = KeywordCatalog.from_dict({"skillCategories": {"A": ["GraphQL"], "B": ["GRAPHQL"]}})
    assert catalog.display_form_of("graphql") == "GraphQL"


def test_views_are_read_only(catalog):
    with pytest.raises(TypeError):
        catalog.section_headers()["extra"] = ("extra",)
    with pytest.raises(TypeError):
        catalog.skill_categories()["Extra"] = ()


def test_section_headers_are_lowercase(catalog):
    headers = catalog.section_headers()
    assert "experience" in headers
    for variations in headers.values():
        assert all(v == v.lower() for v in variations)


def test_required_sections(catalog):
    sections = catalog.required_sections()
    for name in ("summary", "experience", "education", "skills"):
        assert name in sections


def test_from_file_missing_raises(tmp_path):
    with pytest.raises(CatalogLoadError):
        KeywordCatalog.from_file(tmp_path / "missing.json")


def test_from_file_invalid_json_raises(tmp_path):
    path = tmp_path / "keywords.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        KeywordCatalog.from_file(path)


def test_from_file_round_trip(tmp_path):
    path = tmp_path / "keywords.json"
    path.write_text(json.dumps({
        "skillCategories": {"Languages": ["Python", "Go"]},
        "synonymMap": {"Continuous Deployment": ["ci/cd"]},
        "sectionHeaders": {"skills": ["Skills", "Tech Skills"]},
    }), encoding="utf-8")
    catalog = KeywordCatalog.from_file(path)
    assert catalog.is_known_skill("python")
    assert catalog.canonical_of("CI/CD") == "Continuous Deployment"
    assert catalog.section_headers()["skills"] == ("skills", "tech skills")
    assert "ci/cd" in catalog.multi_word_skills()
