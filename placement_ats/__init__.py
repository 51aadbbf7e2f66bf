"""
Placement ATS Engine
Resume / job-description text mining and candidate-job matching for a
campus placement portal.

Architecture:
- Extractors: regex + fixed vocabulary field extraction (no ML)
- Pipelines: resume text -> profile fields, JD text -> job requirements
- Scoring: hard eligibility gates + weighted match score
- Advisor: resume readiness score and improvement suggestions
"""

__version__ = "1.0.0"
__author__ = "Student"
