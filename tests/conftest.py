import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cv_models import CV  # noqa: E402


SAMPLE_CV = {
    "id": "cv-1",
    "title": "Backend CV",
    "data": {
        "personal": {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "title": "Staff Engineer",
            "email": "ada@example.com",
            "phone": "+44 20 7946 0000",
            "location": "London",
            "linkedin": "linkedin.com/in/ada",
            "website": "",
        },
        "summary": "Engineer with a taste for analytical engines.",
        "experience": [
            {
                "company": "Analytical Engines Ltd",
                "title": "Lead Engineer",
                "location": "London",
                "startDate": "2022-03",
                "endDate": "",
                "current": True,
                "description": "• Designed the mill\n- Wrote the first program\n\n   * Reviewed <notes> & tables",
            },
            {
                "company": "Babbage & Co",
                "title": "Engineer",
                "location": "",
                "startDate": "2019-01",
                "endDate": "2022-02",
                "current": False,
                "description": "Single paragraph without line breaks.",
            },
        ],
        "education": [
            {
                "institution": "University of London",
                "degree": "BSc",
                "field": "Mathematics",
                "startDate": "2015-09",
                "endDate": "2018-06",
                "description": "First class honours",
            }
        ],
        "skills": [
            {"category": "Languages", "items": ["Python", "Go"]},
            {"category": "Tools", "items": ["Docker"]},
        ],
        "languages": [
            {"language": "English", "proficiency": "Native"},
            {"language": "Français", "proficiency": "Fluent"},
        ],
        "certifications": [
            {"name": "CKA", "issuer": "CNCF", "date": "2023-05", "url": ""},
        ],
    },
}


@pytest.fixture
def sample_cv() -> CV:
    return CV.model_validate(SAMPLE_CV)


@pytest.fixture
def make_cv():
    def _make(**data) -> CV:
        return CV.model_validate({"title": "Test CV", "data": data})

    return _make
