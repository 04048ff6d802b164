"""Shared test fixtures: sample resume/JD text and in-memory documents."""

import io

import pytest
from docx import Document
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from services.content_library import get_content_library
from services.keyword_catalog import get_catalog


SAMPLE_RESUME = """Priya Sharma
priya.sharma@example.com | +91-9876543210 | linkedin.com/in/priyasharma
Bengaluru, Karnataka

Professional Summary
Backend engineer building APIs in Python and Java. I am a hardworking individual and team player.

Technical Skills
Programming Languages: Python, Java, SQL
Frameworks: Django, React
Tools: Git, Jira

Work Experience
Software Engineer
Acme Technologies | Bengaluru, Karnataka
Jan 2020 - Present
- Responsible for developing the frontend of the billing portal
- Worked on REST APIs for payments using Django
- Migrated reporting jobs to AWS Lambda

Projects
Expense Tracker | Python, Flask
- Built a personal finance tracker with charts

Education
Bachelor of Technology in Computer Science
Visvesvaraya Technological University
2015 - 2019
CGPA: 8.4/10

Certifications
Oracle Certified Associate Java

Personal Details
Date of Birth: 12/05/1997
Marital Status: Single
Nationality: Indian

Declaration
I hereby declare that the above information is true.
"""

SAMPLE_JD = """Senior Backend Engineer at Finlytics.
We are looking for a backend developer with Python, Django, Kubernetes and Docker.
Experience with AWS and PostgreSQL is a plus. Strong communication required.
"""


def make_docx(text: str) -> bytes:
    doc = Document()
    for line in text.split("\n"):
        doc.add_paragraph(line)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def make_pdf(text: str) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    y = A4[1] - 50
    for line in text.split("\n"):
        pdf.drawString(50, y, line)
        y -= 14
        if y < 50:
            pdf.showPage()
            y = A4[1] - 50
    pdf.save()
    return buffer.getvalue()


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def library():
    return get_content_library()


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def sample_jd():
    return SAMPLE_JD
