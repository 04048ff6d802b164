import pytest

from services.content_library import ContentLibrary, ContentLoadError


def test_action_verbs_flattened_in_group_order(library):
    verbs = library.action_verbs("IT_Software")
    assert verbs[0] == "Developed"
    assert "Optimized" in verbs


def test_unknown_industry_is_empty(library):
    assert library.action_verbs("Astrology") == ()
    assert library.summary_templates("Astrology", True) == ()
    assert library.certifications("Astrology") == ()


def test_summary_templates_per_level(library):
    fresher = library.summary_templates("IT_Software", True)
    experienced = library.summary_templates("IT_Software", False)
    assert fresher and experienced
    assert "{targetRole}" in fresher[0]
    assert fresher != experienced


def test_banned_bullet_starters_lowercased(library):
    starters = library.banned_bullet_starters()
    assert "responsible for" in starters
    assert all(s == s.lower() for s in starters)


def test_summary_rules(library):
    assert "team player" in library.banned_summary_phrases()
    assert "Results-driven" in library.summary_start_words()


def test_culturally_specific_fields(library):
    fields = library.culturally_specific_fields()
    assert "dateOfBirth" in fields
    with pytest.raises(TypeError):
        fields["photo"] = "changed"


def test_degree_lookup(library):
    abbreviations = library.degree_abbreviations()
    assert abbreviations
    abbreviation, full = next(iter(abbreviations.items()))
    assert library.full_degree_name(abbreviation) == full
    assert library.full_degree_name("XYZ") == "XYZ"


def test_library_copies_its_input():
    source = {"certificationsByIndustry": {"IT_Software": ["CKAD"]}}
    library = ContentLibrary(source)
    source["certificationsByIndustry"]["IT_Software"].append("Fake")
    assert library.certifications("IT_Software") == ("CKAD",)


def test_non_object_rejected():
    with pytest.raises(ContentLoadError):
        ContentLibrary(["not", "an", "object"])


def test_from_file_invalid_json(tmp_path):
    path = tmp_path / "content.json"
    path.write_text("[", encoding="utf-8")
    with pytest.raises(ContentLoadError):
        ContentLibrary.from_file(path)
