"""
ATS Routes - preview endpoints over the extraction and scoring engine.

POST /ats/resume/parse - Upload resume (PDF/DOCX/TXT) and analyze it
POST /ats/resume/parse-text - Analyze resume text
POST /ats/jd/parse - Upload job description and extract requirements
POST /ats/jd/parse-text - Extract requirements from JD text
POST /ats/match - Score a candidate against a job
POST /ats/eligibility - Run eligibility gates only
POST /ats/suggestions - Resume quality report for an extraction
GET /ats/formats - Get supported formats

Nothing is persisted: callers send the stored profile / job in the request
and store whatever they need from the response.
"""

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from placement_ats.core.config import get_settings
from placement_ats.core.exceptions import DocumentExtractionError
from placement_ats.core.logging_config import get_logger
from placement_ats.schemas.schemas import (
    CandidateProfile,
    EligibilityRequest,
    EligibilityResponse,
    JobDescriptionParseResponse,
    MatchReport,
    MatchRequest,
    ResumeAnalysisRequest,
    ResumeParseResponse,
    SuggestionReport,
    SuggestionRequest,
    TextParseRequest
)
from placement_ats.services.matching_service import INELIGIBLE_RECOMMENDATION, get_scoring_service
from placement_ats.services.parsing_service import (
    calculate_resume_ats_score,
    get_jd_parser,
    get_resume_parser,
    looks_like_failed_extraction,
    merge_profile
)
from placement_ats.services.suggestion_service import get_suggestion_service
from placement_ats.utils.file_upload import extract_text_from_file, get_supported_formats

logger = get_logger(__name__)

router = APIRouter(prefix="/ats", tags=["ATS"])


def _analyze_resume(
    resume_text: str,
    profile: Optional[CandidateProfile] = None,
    filename: Optional[str] = None
) -> ResumeParseResponse:
    """
    Resume flow shared by upload and text endpoints:
    1. Extract fields
    2. Reject garbage text (binary PDF decoded as text)
    3. Merge into the profile and score it
    4. Attach the quality report
    """
    parsed = get_resume_parser().parse(resume_text)

    if looks_like_failed_extraction(parsed):
        logger.warning(f"Resume text looks unreadable (name guess: '{parsed.f_name}')")
        raise DocumentExtractionError(
            "Unable to extract readable text from the resume. "
            "Please upload a DOCX file or a text-based PDF.",
            filename=filename
        )

    merged = merge_profile(profile, parsed)
    ats_score = calculate_resume_ats_score(parsed, profile)
    merged = merged.model_copy(update={"resume_ats_score": ats_score})

    return ResumeParseResponse(
        success=True,
        message="Resume parsed successfully",
        filename=filename,
        extracted_data=parsed,
        profile=merged,
        ats_score=ats_score,
        ats_analysis=get_suggestion_service().advise(parsed, profile)
    )


@router.post("/resume/parse", response_model=ResumeParseResponse)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOCX, or TXT)"),
    profile: Optional[str] = Form(None, description="Stored candidate profile as JSON")
):
    """
    Upload and parse a resume.

    Supported formats: PDF, DOCX, TXT (max 5MB)
    """
    stored = None
    if profile:
        try:
            stored = CandidateProfile.model_validate_json(profile)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=f"Invalid profile: {e}") from e

    resume_text, filename = await extract_text_from_file(
        file, min_length=get_settings().min_resume_text_length
    )
    return _analyze_resume(resume_text, stored, filename)


@router.post("/resume/parse-text", response_model=ResumeParseResponse)
async def parse_resume_text(data: ResumeAnalysisRequest):
    """Analyze resume text that was already extracted elsewhere."""
    return _analyze_resume(data.text, data.profile)


@router.post("/jd/parse", response_model=JobDescriptionParseResponse)
async def parse_job_description(
    file: UploadFile = File(..., description="Job description file (PDF, DOCX, or TXT)")
):
    """Upload a job description and extract its requirements."""
    jd_text, filename = await extract_text_from_file(file)
    parsed = get_jd_parser().parse(jd_text)
    return JobDescriptionParseResponse(success=True, filename=filename, parsed_data=parsed)


@router.post("/jd/parse-text", response_model=JobDescriptionParseResponse)
async def parse_job_description_text(data: TextParseRequest):
    """Extract requirements from job description text."""
    parsed = get_jd_parser().parse(data.text)
    return JobDescriptionParseResponse(success=True, parsed_data=parsed)


@router.post("/match", response_model=MatchReport)
async def match_candidate(data: MatchRequest):
    """
    Score a candidate against a job.

    Ineligible candidates still get 200 with eligible=false and the reasons.
    """
    return get_scoring_service().evaluate(data.profile, data.skills, data.job)


@router.post("/eligibility", response_model=EligibilityResponse)
async def check_eligibility(data: EligibilityRequest):
    """Run the hard eligibility gates without scoring."""
    checks = get_scoring_service().check_eligibility(data.profile, data.job)
    recommendation = (
        "You meet all eligibility criteria for this job"
        if checks.all_passed else INELIGIBLE_RECOMMENDATION
    )
    return EligibilityResponse(
        eligible=checks.all_passed,
        eligibility_checks=checks,
        recommendation=recommendation
    )


@router.post("/suggestions", response_model=SuggestionReport)
async def resume_suggestions(data: SuggestionRequest):
    """Resume quality report for an existing extraction."""
    return get_suggestion_service().advise(data.parsed, data.profile)


@router.get("/formats")
async def get_formats():
    """Get supported document formats."""
    return get_supported_formats()
