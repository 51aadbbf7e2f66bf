"""
Parsing Service - Resume and Job Description extraction pipelines.

PURPOSE:
1. Resume parsing (text -> ParsedResume)
2. Job description parsing (text -> ParsedJobDescription)
3. Merging fresh extractions into stored records

Every field extractor runs once, independently, over the same normalized
text. Pipelines do no validation or fallback of their own: they are a
straight aggregation of parallel extractions. The minimum-length policy for
extracted text lives with the caller (see utils/file_upload.py).
"""

from typing import List, Optional

from placement_ats.core.config import Settings, get_settings
from placement_ats.core.exceptions import require
from placement_ats.core.logging_config import get_logger, PerformanceMonitor
from placement_ats.core.vocabulary import (
    BranchKeywordTable,
    SkillVocabulary,
    default_jd_branch_table,
    default_resume_branch_table,
    default_skill_vocabulary
)
from placement_ats.schemas.schemas import (
    BranchCode,
    CandidateProfile,
    JobRequirement,
    ParsedJobDescription,
    ParsedResume
)
from placement_ats.services import extractors
from placement_ats.utils.numbers import round_half_up
from placement_ats.utils.text import normalize

logger = get_logger(__name__)

PROFILE_FIELD_MAX_LENGTH = 255
FAILED_NAME_MAX_LENGTH = 100


# ============================================================
# RESUME PARSING SERVICE
# ============================================================

class ResumeParsingService:
    """
    Resume extraction pipeline:
    1. Normalize text
    2. Run name / contact / skills / CGPA / branch / year extractors
    3. Aggregate into ParsedResume (raw text truncated for storage)
    """

    def __init__(
        self,
        vocabulary: SkillVocabulary = None,
        branch_table: BranchKeywordTable = None,
        settings: Settings = None
    ):
        self.vocabulary = vocabulary or default_skill_vocabulary()
        self.branch_table = branch_table or default_resume_branch_table()
        self.settings = settings or get_settings()

    def parse(self, resume_text: str) -> ParsedResume:
        """
        Extract candidate fields from resume text.

        Args:
            resume_text: Text produced by the document extractor

        Returns:
            ParsedResume with None for every field that was not found
        """
        require(isinstance(resume_text, str), "Resume text must be a string", argument="resume_text")

        with PerformanceMonitor("resume extraction", logger=logger):
            doc = normalize(resume_text)
            name = extractors.extract_name(doc.text)

            parsed = ParsedResume(
                email=extractors.extract_email(doc.text),
                phone=extractors.extract_phone(doc.text),
                f_name=name.f_name,
                m_name=name.m_name,
                l_name=name.l_name,
                skills=sorted(extractors.extract_skills(doc.lower, self.vocabulary)),
                cgpa=extractors.extract_cgpa(doc.text),
                branch=extractors.extract_branch(doc.lower, self.branch_table),
                academic_year=extractors.extract_academic_year(doc.text),
                raw_text=doc.text[:self.settings.resume_raw_text_limit]
            )

        logger.info(
            f"Resume extracted: name='{name.full_name}', skills={len(parsed.skills)}, "
            f"cgpa={parsed.cgpa or 'Not found'}, branch={_enum_value(parsed.branch) or 'Not found'}, "
            f"year={parsed.academic_year or 'Not found'}"
        )
        return parsed


def looks_like_failed_extraction(parsed: ParsedResume) -> bool:
    """
    True when the name guess suggests the document text was garbage
    (image-only or binary PDF decoded as text).
    """
    f_name = parsed.f_name or ''
    return not f_name or 'PDF' in f_name or len(f_name) > FAILED_NAME_MAX_LENGTH


def _truncate(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value[:PROFILE_FIELD_MAX_LENGTH]


def _enum_value(value) -> Optional[str]:
    return value.value if isinstance(value, BranchCode) else value


def merge_profile(existing: Optional[CandidateProfile], parsed: ParsedResume) -> CandidateProfile:
    """
    Apply a fresh resume extraction to a stored profile.

    Non-null extracted values overwrite stored ones; nulls keep what is
    stored. Skills are replaced wholesale when the extraction found any.
    """
    require(parsed is not None, "Parsed resume is required", argument="parsed")
    base = existing or CandidateProfile()

    updates = {
        "f_name": _truncate(parsed.f_name),
        "m_name": _truncate(parsed.m_name),
        "l_name": _truncate(parsed.l_name),
        "email": _truncate(parsed.email),
        "phone": _truncate(parsed.phone),
        "register_number": _truncate(parsed.register_number),
        "cgpa": parsed.cgpa,
        "branch": parsed.branch,
        "academic_year": parsed.academic_year,
    }
    merged = {field: value for field, value in updates.items() if value is not None}

    if parsed.skills:
        merged["skills"] = list(parsed.skills)

    return base.model_copy(update=merged)


def calculate_resume_ats_score(parsed: ParsedResume, profile: Optional[CandidateProfile] = None) -> int:
    """
    Profile-level ATS score stored with the candidate after an upload.

    Skills up to 40 pts, CGPA band up to 30 pts, completeness up to 30 pts.
    """
    score = 0.0

    # 1. Skills (40 points, full marks at 10 skills)
    score += min(len(parsed.skills) / 10 * 40, 40)

    # 2. CGPA (30 points)
    cgpa = parsed.cgpa if parsed.cgpa is not None else (profile.cgpa if profile else None)
    cgpa = cgpa or 0
    if cgpa >= 9.0:
        score += 30
    elif cgpa >= 8.0:
        score += 25
    elif cgpa >= 7.0:
        score += 20
    elif cgpa >= 6.0:
        score += 15
    elif cgpa > 0:
        score += 10

    # 3. Completeness (30 points)
    if parsed.f_name and parsed.l_name:
        score += 10
    if parsed.email:
        score += 5
    if parsed.phone:
        score += 5
    if parsed.branch or (profile and profile.branch):
        score += 5
    if parsed.register_number or (profile and profile.register_number):
        score += 5

    final_score = round_half_up(score)
    logger.debug(f"Resume ATS score: {final_score}")
    return final_score


# ============================================================
# JOB DESCRIPTION PARSING SERVICE
# ============================================================

class JobDescriptionParsingService:
    """
    JD extraction pipeline:
    1. Normalize text
    2. Run skills / min CGPA / backlogs / branches / package extractors
    3. Aggregate into ParsedJobDescription (+ description fallback)
    """

    def __init__(
        self,
        vocabulary: SkillVocabulary = None,
        branch_table: BranchKeywordTable = None,
        settings: Settings = None
    ):
        self.vocabulary = vocabulary or default_skill_vocabulary()
        self.branch_table = branch_table or default_jd_branch_table()
        self.settings = settings or get_settings()

    def parse(self, jd_text: str) -> ParsedJobDescription:
        require(isinstance(jd_text, str), "Job description text must be a string", argument="jd_text")

        with PerformanceMonitor("JD extraction", logger=logger):
            doc = normalize(jd_text)
            parsed = ParsedJobDescription(
                skills=sorted(extractors.extract_skills(doc.lower, self.vocabulary)),
                min_cgpa=extractors.extract_min_cgpa(doc.text),
                max_backlogs=extractors.extract_max_backlogs(doc.text),
                allowed_branches=extractors.extract_branches(doc.lower, self.branch_table),
                package_lpa=extractors.extract_package(doc.text),
                description=doc.text[:self.settings.jd_description_limit]
            )

        branches = ', '.join(b.value for b in parsed.allowed_branches) if parsed.allowed_branches else 'All branches'
        logger.info(
            f"JD extracted: skills={len(parsed.skills)}, "
            f"min_cgpa={parsed.min_cgpa if parsed.min_cgpa is not None else 'Not specified'}, "
            f"max_backlogs={parsed.max_backlogs if parsed.max_backlogs is not None else 'Not specified'}, "
            f"branches={branches}, "
            f"package={str(parsed.package_lpa) + ' LPA' if parsed.package_lpa else 'Not specified'}"
        )
        return parsed


def build_job_requirement(
    title: str,
    parsed: Optional[ParsedJobDescription] = None,
    description: Optional[str] = None,
    skills: Optional[List[str]] = None,
    min_cgpa: Optional[float] = None,
    max_backlogs: Optional[int] = None,
    allowed_branches: Optional[List[str]] = None,
    package_lpa: Optional[float] = None
) -> JobRequirement:
    """
    Combine manually entered job fields with a parsed JD.

    Manual values win whenever they are provided. Zero is a real value for
    min_cgpa and max_backlogs; empty skill and branch lists and a zero
    package count as not entered.
    """
    parsed = parsed or ParsedJobDescription()

    return JobRequirement(
        title=title,
        description=description or parsed.description,
        skills=skills if skills else list(parsed.skills),
        min_cgpa=min_cgpa if min_cgpa is not None else parsed.min_cgpa,
        max_backlogs=max_backlogs if max_backlogs is not None else parsed.max_backlogs,
        allowed_branches=allowed_branches if allowed_branches else parsed.allowed_branches,
        package_lpa=package_lpa if package_lpa else parsed.package_lpa
    )


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_resume_parser() -> ResumeParsingService:
    """Get resume parsing service instance."""
    return ResumeParsingService()


def get_jd_parser() -> JobDescriptionParsingService:
    """Get JD parsing service instance."""
    return JobDescriptionParsingService()
