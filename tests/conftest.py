import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ATS_ENVIRONMENT", "testing")

from placement_ats.core.vocabulary import SkillVocabulary  # noqa: E402
from placement_ats.schemas.schemas import CandidateProfile, JobRequirement, ParsedResume  # noqa: E402


RESUME_TEXT = """Priya Ramesh Kumar
priya.kumar@example.com | +91 9876543210
Chennai, India

EDUCATION
Bachelor of Technology in Computer Science and Engineering (2021 - 2025)
CGPA: 8.09/10

SKILLS
Python, Java, React, Node.js, MySQL, Docker, Git, C++

PROJECTS
Placement portal built with Django and PostgreSQL
"""

JD_TEXT = """Software Engineer - Campus Hiring 2025
We are looking for graduates skilled in Python, React and AWS.
Eligibility: Minimum CGPA 7.5 and above. No backlogs.
Open to Computer Science and Information Technology branches.
Package: 12 LPA
"""


@pytest.fixture
def resume_text():
    return RESUME_TEXT


@pytest.fixture
def jd_text():
    return JD_TEXT


@pytest.fixture
def small_vocabulary():
    return SkillVocabulary.from_tokens(["python", "react", "aws", "c++", "node.js"])


@pytest.fixture
def full_profile():
    return CandidateProfile(
        f_name="Priya",
        l_name="Kumar",
        email="priya.kumar@example.com",
        phone="9876543210",
        register_number="21CS1042",
        cgpa=8.6,
        backlogs=0,
        branch="CSE",
        academic_year=2021,
        skills=["python", "reactjs"]
    )


@pytest.fixture
def backend_job():
    return JobRequirement(
        title="Backend Engineer",
        skills=["Python", "React", "AWS"],
        min_cgpa=7.0,
        max_backlogs=0,
        allowed_branches=["CSE", "IT"],
        package_lpa=12
    )


@pytest.fixture
def complete_parsed_resume():
    return ParsedResume(
        email="priya.kumar@example.com",
        phone="9876543210",
        f_name="Priya",
        l_name="Kumar",
        skills=[
            "python", "java", "react", "node.js", "mysql", "docker", "git", "c++",
            "django", "postgresql", "aws", "linux", "html", "css", "sql"
        ],
        cgpa=8.09,
        branch="CSE",
        academic_year=2021
    )


@pytest.fixture
def client():
    from placement_ats.main import app
    return TestClient(app)
