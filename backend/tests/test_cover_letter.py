import datetime
from unittest.mock import AsyncMock, patch

import pytest

from conftest import SAMPLE_JD, SAMPLE_RESUME
from services.cover_letter import (
    DEFAULT_COMPANY,
    DEFAULT_NAME,
    DEFAULT_ROLE,
    build_cover_letter,
    extract_company_name,
    extract_experience_summary,
    extract_name,
    extract_requirements,
    extract_role_name,
    extract_skills,
    find_relevant_skills,
    format_date,
    generate_cover_letter_text,
    write_cover_letter,
)

MARCH_5 = datetime.date(2024, 3, 5)


class TestResumeSide:
    def test_name_is_first_short_line(self):
        assert extract_name(SAMPLE_RESUME) == "Priya Sharma"

    def test_name_skips_contact_lines(self):
        assert extract_name("Email: jo@example.com\nJohn Smith\nSummary") == "John Smith"

    def test_name_default(self):
        assert extract_name("") == DEFAULT_NAME

    def test_skills_block_without_category_prefixes(self):
        assert extract_skills(SAMPLE_RESUME) == ["Python", "Java", "SQL", "Django", "React", "Git", "Jira"]

    def test_skills_fallback_to_known_terms(self):
        assert extract_skills("I build services in Python and ship them with Docker") == ["Python", "Docker"]

    def test_experience_from_years_phrase(self):
        assert extract_experience_summary("5+ years of experience in Python") == "5+ years of professional experience"

    def test_experience_from_date_ranges(self):
        assert extract_experience_summary(SAMPLE_RESUME) == "experience across 2 professional roles"

    def test_experience_default(self):
        assert extract_experience_summary("") == "relevant professional experience"


class TestJobSide:
    def test_company_after_at(self):
        assert extract_company_name(SAMPLE_JD) == "Finlytics"

    def test_company_after_join(self):
        assert extract_company_name("Join Acme Corp, a fintech leader") == "Acme Corp"

    def test_company_default(self):
        assert extract_company_name("no company info here") == DEFAULT_COMPANY

    def test_role_from_label(self):
        assert extract_role_name("Position: Data Analyst\nWe need SQL.") == "Data Analyst"

    def test_role_from_hiring_phrase(self):
        assert extract_role_name("We are hiring an ML Engineer with 3 years of Python") == "ML Engineer"

    def test_role_default(self):
        assert extract_role_name("") == DEFAULT_ROLE

    def test_requirements_block(self):
        jd = "Requirements:\n- 3+ years with Python\n- Experience with Docker\n\nBenefits\n- Remote"
        assert extract_requirements(jd) == ["3+ years with Python", "Experience with Docker"]

    def test_requirements_from_tech_terms(self):
        requirements = extract_requirements(SAMPLE_JD)
        assert requirements[0] == "proficiency in Python"
        assert "proficiency in Kubernetes" in requirements
        assert len(requirements) <= 6


def test_relevant_skills_fall_back_to_top_four():
    assert find_relevant_skills(["Go", "Rust", "Java", "Lisp", "Elm"], ["proficiency in Python"]) == [
        "Go", "Rust", "Java", "Lisp",
    ]


def test_format_date():
    assert format_date(MARCH_5) == "March 5, 2024"


def test_build_cover_letter_structure():
    letter = build_cover_letter(
        "Jane Doe", "Acme", "Data Engineer", ["Python", "Airflow"], "3+ years of professional experience",
        ["proficiency in Python", "proficiency in AWS", "proficiency in Docker"], MARCH_5,
    )
    assert letter.startswith("Jane Doe\nMarch 5, 2024\n\nDear Hiring Manager,")
    assert "the Data Engineer position at Acme" in letter
    assert "My experience includes Python, AWS, and Docker" in letter
    assert letter.endswith("Sincerely,\nJane Doe")


def test_write_cover_letter_from_sample():
    result = write_cover_letter(SAMPLE_RESUME, SAMPLE_JD, today=MARCH_5)
    assert result.candidate_name == "Priya Sharma"
    assert result.company_name == "Finlytics"
    assert result.target_role == "backend developer"
    assert "March 5, 2024" in result.cover_letter_text
    assert "Python" in result.cover_letter_text


@pytest.mark.asyncio
async def test_generated_cover_letter_is_trimmed():
    with patch("services.gemini_client.generate", new=AsyncMock(return_value="  Dear Hiring Manager,\n...  ")) as mock:
        text = await generate_cover_letter_text(SAMPLE_RESUME, SAMPLE_JD)
    assert text == "Dear Hiring Manager,\n..."
    system_prompt, user_prompt = mock.call_args.args
    assert "Priya Sharma" in user_prompt
    assert "Finlytics" in user_prompt
