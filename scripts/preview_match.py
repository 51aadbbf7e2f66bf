#!/usr/bin/env python3
"""
Resume vs Job Preview Script

Runs the whole engine on a resume and a job description without the API:
1. Resume extraction + quality suggestions
2. JD extraction
3. Eligibility + match report

Files may be PDF, DOCX or TXT. With no arguments, built-in samples are used.

Run: python scripts/preview_match.py [resume_file] [jd_file]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, '.')

from placement_ats.core.config import get_settings
from placement_ats.core.exceptions import PlacementATSError
from placement_ats.core.logging_config import setup_logging
from placement_ats.services.matching_service import get_scoring_service
from placement_ats.services.parsing_service import (
    build_job_requirement,
    calculate_resume_ats_score,
    get_jd_parser,
    get_resume_parser,
    merge_profile
)
from placement_ats.services.suggestion_service import get_suggestion_service
from placement_ats.utils.file_upload import extract_text_from_bytes

SAMPLE_RESUME = """Arjun Mehta
arjun.mehta@example.com | +91 9123456780

EDUCATION
B.Tech in Information Technology (2022 - Present)
CGPA: 7.8/10

SKILLS
Python, Flask, React, MySQL, Git, Docker, Linux
"""

SAMPLE_JD = """Associate Software Engineer
Skills required: Python, React, AWS, Docker, Kubernetes.
Minimum CGPA 7.0 and above. No backlogs.
Eligible branches: Computer Science, Information Technology.
CTC: 9 LPA
"""


def read_document(path: str, min_length: int = None) -> str:
    file_path = Path(path)
    return extract_text_from_bytes(file_path.read_bytes(), file_path.name, min_length)


def print_resume(parsed, ats_score, report):
    print("\n[1] Resume")
    print(f"    Name:     {parsed.f_name} {parsed.l_name}".rstrip())
    print(f"    Email:    {parsed.email or 'Not found'}")
    print(f"    Phone:    {parsed.phone or 'Not found'}")
    print(f"    CGPA:     {parsed.cgpa if parsed.cgpa is not None else 'Not found'}")
    print(f"    Branch:   {parsed.branch.value if parsed.branch else 'Not found'}")
    print(f"    Year:     {parsed.academic_year or 'Not found'}")
    print(f"    Skills:   {', '.join(parsed.skills) or 'None'}")
    print(f"    Profile ATS score: {ats_score}/100")
    print(f"    Readiness: {report.ats_readiness.percentage}% ({report.ats_readiness.rating.level})")
    for suggestion in report.suggestions:
        print(f"      [{suggestion.impact.value}] {suggestion.field}: {suggestion.suggestion}")


def print_job(job):
    print("\n[2] Job description")
    print(f"    Skills:    {', '.join(job.skills) or 'None'}")
    print(f"    Min CGPA:  {job.min_cgpa if job.min_cgpa is not None else 'Not specified'}")
    print(f"    Backlogs:  {job.max_backlogs if job.max_backlogs is not None else 'Not specified'}")
    branches = ', '.join(b.value for b in job.allowed_branches) if job.allowed_branches else 'All branches'
    print(f"    Branches:  {branches}")
    print(f"    Package:   {str(job.package_lpa) + ' LPA' if job.package_lpa else 'Not specified'}")


def print_match(report):
    print("\n[3] Match")
    print(f"    Eligible:  {report.eligible}")
    for reason in report.eligibility_checks.reasons:
        print(f"      - {reason}")
    print(f"    Overall:   {report.overall_score}/100")
    if report.eligible:
        print(f"    Skills:    {report.breakdown.skills} "
              f"(matched: {', '.join(report.skills_analysis.matching_skills) or 'none'}; "
              f"missing: {', '.join(report.skills_analysis.missing_skills) or 'none'})")
        print(f"    Profile:   {report.breakdown.profile_completeness}")
        print(f"    Academic:  {report.breakdown.academic_performance}")
    for recommendation in report.recommendations:
        print(f"    -> {recommendation}")


def main():
    parser = argparse.ArgumentParser(description="Preview resume extraction and job matching")
    parser.add_argument("resume", nargs="?", help="Resume file (PDF, DOCX or TXT)")
    parser.add_argument("jd", nargs="?", help="Job description file (PDF, DOCX or TXT)")
    parser.add_argument("--title", default="Preview Job", help="Job title")
    parser.add_argument("--log-level", default="WARNING", help="Engine log level")
    args = parser.parse_args()

    setup_logging(level=args.log_level.upper(), format_style="simple")

    print("=" * 60)
    print("PLACEMENT ATS PREVIEW")
    print("=" * 60)

    try:
        min_length = get_settings().min_resume_text_length
        resume_text = read_document(args.resume, min_length) if args.resume else SAMPLE_RESUME
        jd_text = read_document(args.jd) if args.jd else SAMPLE_JD
    except PlacementATSError as e:
        print(f"\n❌ {e.message}")
        sys.exit(1)

    parsed = get_resume_parser().parse(resume_text)
    profile = merge_profile(None, parsed)
    print_resume(parsed, calculate_resume_ats_score(parsed), get_suggestion_service().advise(parsed))

    job = build_job_requirement(args.title, get_jd_parser().parse(jd_text))
    print_job(job)

    print_match(get_scoring_service().evaluate(profile, None, job))
    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
