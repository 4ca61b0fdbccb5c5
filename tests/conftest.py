"""Shared fixtures: a realistic tailored resume payload and measurers."""

import copy

import pytest

from tailorfit.contexts.modeling import build_style_table, load_payload
from tailorfit.contexts.rendering.measurement import ApproximateTextMeasure, ReportLabTextMeasure

SAMPLE_PAYLOAD = {
    "resume": {
        "name": "Jane Doe",
        "email": "jane.doe@example.com",
        "phone": "(555) 010-0100",
        "linkedin": "linkedin.com/in/janedoe",
        "github": None,
        "website": "",
        "summary": "Backend engineer with six years building data-heavy APIs and event pipelines.",
        "skills": [
            "Languages: Python, Go, TypeScript, SQL",
            "Frameworks: FastAPI, Django | Cloud: AWS, GCP",
            "Tools: Docker, Terraform, Git",
        ],
        "experience": [
            {
                "company": "Acme Corp",
                "title": "Senior Software Engineer",
                "location": "Remote",
                "dateRange": "Jan 2021 – Present",
                "bullets": [
                    {"text": "Designed an event ingestion service handling 40k messages per second with p99 latency under 50 ms."},
                    {"text": "Led migration of billing jobs from cron to Airflow, cutting failed runs by 80%."},
                    {"text": "Mentored four engineers through design reviews and pairing."},
                ],
            },
            {
                "company": "Initech",
                "title": "Software Engineer",
                "location": "",
                "dateRange": "Jun 2018 – Dec 2020",
                "bullets": [
                    {"text": "Built REST APIs for the reporting platform used by 300 enterprise customers."},
                    {"text": "Reduced nightly ETL runtime from 6 hours to 90 minutes by partitioning Postgres tables."},
                ],
            },
        ],
        "education": [
            {
                "institution": "State University",
                "degree": "BS Computer Science",
                "dateRange": "2014 – 2018",
                "gpa": "3.8",
                "honors": None,
            }
        ],
        "projects": [
            {
                "name": "queue-bench",
                "technologies": "Go, Kafka",
                "bullets": [{"text": "Open-source benchmark harness for message brokers."}],
            }
        ],
    },
    "sourceLayout": {
        "sections": [
            {"kind": "summary", "heading": "Summary", "lines": ["Backend engineer."]},
            {"kind": "experience", "heading": "Work Experience", "lines": ["Senior Software Engineer, Acme Corp"]},
            {"kind": "skills", "heading": "Technical Skills", "lines": ["Python, Go"]},
            {
                "kind": "education",
                "heading": "Education",
                "lines": ["State University, BS Computer Science", "Thesis on stream joins"],
                "educationDetailBlocks": [["Thesis on stream joins"]],
            },
            {"kind": "projects", "heading": "Projects", "lines": ["queue-bench"]},
        ]
    },
}

CUSTOM_SECTION_LINES = [
    "AWS Certified Solutions Architect - Associate",
    "Certified Kubernetes Application Developer",
    "Speaker, PyCon US 2023: Backpressure in async pipelines",
    "Organizer, Portland Python meetup",
    "Volunteer mentor, Code for Good",
    "Fluent in Spanish",
    "Published: Practical Event Sourcing (blog series)",
]


@pytest.fixture
def sample_payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_resume(sample_payload):
    resume, _ = load_payload(sample_payload)
    return resume


@pytest.fixture
def sample_layout(sample_payload):
    _, layout = load_payload(sample_payload)
    return layout


@pytest.fixture
def custom_layout(sample_payload):
    """Sample layout plus a seven-line custom section."""
    sample_payload["sourceLayout"]["sections"].append(
        {"kind": "custom", "heading": "Certifications & Talks", "lines": list(CUSTOM_SECTION_LINES)}
    )
    _, layout = load_payload(sample_payload)
    return layout


@pytest.fixture
def style_table():
    return build_style_table()


@pytest.fixture
def approx_measure():
    """5pt per character at 10pt (bold 10% wider)."""
    return ApproximateTextMeasure()


@pytest.fixture
def reportlab_measure():
    return ReportLabTextMeasure()


@pytest.fixture
def custom_section_lines():
    return list(CUSTOM_SECTION_LINES)
