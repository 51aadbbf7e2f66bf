"""
Pydantic Schemas - Engine records and API request/response payloads.

All schemas in one file for simplicity. Field names on MatchReport and
SuggestionReport are the JSON contract with the portal UI.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Optional, List
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class BranchCode(str, Enum):
    CSE = "CSE"
    ECE = "ECE"
    EEE = "EEE"
    MECH = "MECH"
    CIVIL = "CIVIL"
    IT = "IT"


class PlacementStatus(str, Enum):
    placed = "placed"
    unplaced = "unplaced"


class ImpactLevel(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


# ============================================================
# EXTRACTION RECORDS
# ============================================================

class CandidateName(BaseModel):
    model_config = ConfigDict(frozen=True)

    f_name: str = ""
    m_name: str = ""
    l_name: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.f_name, self.m_name, self.l_name) if part)


class ExtractedContact(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    phone: Optional[str] = None
    name: CandidateName = CandidateName()


class AcademicRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    cgpa: Optional[float] = Field(None, ge=0, le=10)
    backlogs: Optional[int] = Field(None, ge=0)
    branch: Optional[BranchCode] = None
    academic_year: Optional[int] = None


class ParsedResume(BaseModel):
    """Output of the resume extraction pipeline."""
    email: Optional[str] = None
    phone: Optional[str] = None
    f_name: str = ""
    m_name: str = ""
    l_name: str = ""
    skills: List[str] = []
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    branch: Optional[BranchCode] = None
    academic_year: Optional[int] = None
    register_number: Optional[str] = None
    raw_text: str = ""

    @property
    def contact(self) -> ExtractedContact:
        return ExtractedContact(
            email=self.email,
            phone=self.phone,
            name=CandidateName(f_name=self.f_name, m_name=self.m_name, l_name=self.l_name)
        )

    @property
    def academics(self) -> AcademicRecord:
        return AcademicRecord(cgpa=self.cgpa, branch=self.branch, academic_year=self.academic_year)


class ParsedJobDescription(BaseModel):
    """Output of the JD extraction pipeline."""
    skills: List[str] = []
    min_cgpa: Optional[float] = Field(None, ge=0, le=10)
    max_backlogs: Optional[int] = Field(None, ge=0)
    allowed_branches: Optional[List[BranchCode]] = None
    package_lpa: Optional[float] = Field(None, ge=1, le=100)
    description: str = ""


# ============================================================
# PROFILE / JOB RECORDS
# ============================================================

class CandidateProfile(BaseModel):
    f_name: Optional[str] = None
    m_name: Optional[str] = None
    l_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    register_number: Optional[str] = None
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    backlogs: Optional[int] = Field(None, ge=0)
    branch: Optional[BranchCode] = None
    academic_year: Optional[int] = None
    skills: List[str] = []
    placement_status: PlacementStatus = PlacementStatus.unplaced
    resume_ats_score: Optional[int] = Field(None, ge=0, le=100)

    @field_validator("branch", mode="before")
    @classmethod
    def normalize_branch(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
            return value or None
        return value


class JobRequirement(BaseModel):
    title: str = ""
    description: str = ""
    skills: List[str] = []
    min_cgpa: Optional[float] = Field(None, ge=0, le=10)
    max_backlogs: Optional[int] = Field(None, ge=0)
    allowed_branches: Optional[List[BranchCode]] = None
    package_lpa: Optional[float] = Field(None, ge=1, le=100)

    @field_validator("allowed_branches", mode="before")
    @classmethod
    def normalize_branches(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        return [b.strip().upper() if isinstance(b, str) else b for b in value]


# ============================================================
# MATCH REPORT
# ============================================================

class EligibilityCheck(BaseModel):
    passed: bool = True
    message: str = ""


class EligibilityChecks(BaseModel):
    placement_check: EligibilityCheck = EligibilityCheck()
    cgpa_check: EligibilityCheck = EligibilityCheck()
    backlogs_check: EligibilityCheck = EligibilityCheck()
    branch_check: EligibilityCheck = EligibilityCheck()
    all_passed: bool = True
    reasons: List[str] = []


class SkillsAnalysis(BaseModel):
    score: int = 0
    matching_skills: List[str] = []
    missing_skills: List[str] = []
    match_percentage: int = 0

    @computed_field
    @property
    def matched_skills(self) -> List[str]:
        return self.matching_skills


class ScoreBreakdown(BaseModel):
    skills: Optional[int] = None
    profile_completeness: Optional[int] = None
    academic_performance: Optional[int] = None


class MatchReport(BaseModel):
    overall_score: int = Field(0, ge=0, le=100)
    eligible: bool = True
    eligibility_checks: EligibilityChecks = EligibilityChecks()
    skills_analysis: SkillsAnalysis = SkillsAnalysis()
    breakdown: ScoreBreakdown = ScoreBreakdown()
    missing_profile_fields: List[str] = []
    recommendations: List[str] = []

    @computed_field
    @property
    def ats_score(self) -> int:
        return self.overall_score


# ============================================================
# SUGGESTION REPORT
# ============================================================

class Suggestion(BaseModel):
    field: str
    issue: str
    suggestion: str
    impact: ImpactLevel
    priority: int


class ReadinessRating(BaseModel):
    level: str
    color: str


class ATSReadiness(BaseModel):
    score: int
    max_score: int = 100
    percentage: int
    rating: ReadinessRating


class SuggestionReport(BaseModel):
    ats_readiness: ATSReadiness
    missing: List[str] = []
    warnings: List[str] = []
    suggestions: List[Suggestion] = []
    summary: str = ""


# ============================================================
# API SCHEMAS
# ============================================================

class TextParseRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ResumeAnalysisRequest(BaseModel):
    text: str = Field(..., min_length=1)
    profile: Optional[CandidateProfile] = None


class ResumeParseResponse(BaseModel):
    success: bool
    message: str
    filename: Optional[str] = None
    extracted_data: ParsedResume
    profile: CandidateProfile
    ats_score: int
    ats_analysis: SuggestionReport


class JobDescriptionParseResponse(BaseModel):
    success: bool
    filename: Optional[str] = None
    parsed_data: ParsedJobDescription


class MatchRequest(BaseModel):
    profile: CandidateProfile
    skills: Optional[List[str]] = None
    job: JobRequirement


class EligibilityRequest(BaseModel):
    profile: CandidateProfile
    job: JobRequirement


class EligibilityResponse(BaseModel):
    eligible: bool
    eligibility_checks: EligibilityChecks
    recommendation: str


class SuggestionRequest(BaseModel):
    parsed: ParsedResume
    profile: Optional[CandidateProfile] = None


class MessageResponse(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    detail: str
