"""Job-description industry classification by keyword-bag counts."""

import logging

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = "IT_Software"

INDUSTRY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "IT_Software": (
        "software", "developer", "programming", "java", "python", "javascript", "react",
        "angular", "spring boot", "node.js", "full stack", "backend", "frontend", "devops",
        "cloud", "aws", "api", "microservices", "web development", "mobile app", "database",
        "sql", "agile", "scrum",
    ),
    "Data_Science_AI": (
        "data scientist", "machine learning", "deep learning", "artificial intelligence",
        "nlp", "natural language", "tensorflow", "pytorch", "data analyst", "data engineer",
        "big data", "spark", "hadoop", "tableau", "power bi", "statistics", "predictive model",
    ),
    "Mechanical_Engineering": (
        "mechanical engineer", "solidworks", "catia", "autocad", "cad design", "fea", "cfd",
        "thermodynamics", "manufacturing", "cnc", "gd&t", "hvac", "machine design",
        "product design", "ansys",
    ),
    "Civil_Engineering": (
        "civil engineer", "structural", "construction", "site engineer", "staad pro", "etabs",
        "revit", "bim", "surveying", "rcc design", "quantity surveying", "primavera",
        "transportation", "geotechnical",
    ),
    "Electrical_Engineering": (
        "electrical engineer", "plc", "scada", "power systems", "control systems",
        "electrical design", "automation", "panel design", "substation", "renewable energy",
        "solar", "etap", "switchgear",
    ),
    "Electronics_Communication": (
        "electronics engineer", "embedded", "pcb", "vlsi", "fpga", "microcontroller", "iot",
        "firmware", "signal processing", "rf engineer", "antenna", "communication systems",
        "verilog", "vhdl", "arm",
    ),
    "Pharmacy": (
        "pharmacist", "pharmacy", "pharmaceutical", "drug", "clinical", "formulation", "hplc",
        "gmp", "pharmacovigilance", "regulatory affairs", "drug safety", "quality control",
        "prescription", "patient counseling", "pharmacology",
    ),
    "UI_UX_Design": (
        "ui/ux", "ux designer", "ui designer", "user experience", "user interface", "figma",
        "wireframe", "prototype", "usability", "user research", "information architecture",
        "interaction design", "design system",
    ),
    "Graphic_Design_VFX": (
        "graphic designer", "photoshop", "illustrator", "indesign", "logo design", "branding",
        "vfx", "animation", "3d modeling", "maya", "blender", "after effects",
        "motion graphics", "video editing", "premiere pro", "nuke",
    ),
    "Digital_Marketing": (
        "digital marketing", "seo", "sem", "google ads", "social media", "content marketing",
        "email marketing", "ppc", "facebook ads", "analytics", "marketing automation",
        "hubspot", "copywriting",
    ),
}


def industry_scores(job_description: str) -> dict[str, int]:
    """Count how many of each industry's keywords occur in the job description."""
    jd_lower = job_description.lower()
    return {
        industry: sum(1 for keyword in keywords if keyword in jd_lower)
        for industry, keywords in INDUSTRY_KEYWORDS.items()
    }


def detect_industry(job_description: str) -> str:
    """Best-fit industry label; ties go to the earlier label, no hits to IT_Software."""
    best, highest = DEFAULT_INDUSTRY, 0
    for industry, score in industry_scores(job_description).items():
        if score > highest:
            best, highest = industry, score
    logger.info("Detected industry %s (score=%d)", best, highest)
    return best
