"""
Schemas module - engine records and API request/response schemas.

- Records: what the extraction pipelines and scorer produce/consume
- API schemas: what the preview endpoints accept/return
"""

from placement_ats.schemas.schemas import (
    BranchCode, PlacementStatus, ImpactLevel,
    CandidateName, ExtractedContact, AcademicRecord,
    ParsedResume, ParsedJobDescription, CandidateProfile, JobRequirement,
    EligibilityCheck, EligibilityChecks, SkillsAnalysis, ScoreBreakdown, MatchReport,
    Suggestion, ReadinessRating, ATSReadiness, SuggestionReport
)
