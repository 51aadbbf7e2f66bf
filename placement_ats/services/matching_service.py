"""
Eligibility & Scoring Service

PURPOSE:
Rank a candidate against a job posting: hard eligibility gates first, then
a weighted match score with a breakdown.

HOW IT WORKS:
1. Eligibility gates (placement status, CGPA, backlogs, branch)
2. Any failed gate -> overall score 0, eligible = False, stop
3. Skills score (substring-symmetric matching against required skills)
4. Profile completeness score
5. Academic score (CGPA band + zero-backlog bonus)
6. Weighted overall score + recommendation band

WHY HARD GATES?
- CGPA / backlog / branch limits are institutional policy, not preference
- Partial credit for a disqualified candidate is meaningless

Pure computation: the same inputs always give the same report. Persisting
the score next to an application is the caller's job.
"""

from typing import List, Optional, Tuple

from placement_ats.core.config import Settings, get_settings
from placement_ats.core.exceptions import require
from placement_ats.core.logging_config import get_logger
from placement_ats.schemas.schemas import (
    CandidateProfile,
    EligibilityCheck,
    EligibilityChecks,
    JobRequirement,
    MatchReport,
    PlacementStatus,
    ScoreBreakdown,
    SkillsAnalysis
)
from placement_ats.services.extractors import match_skill
from placement_ats.utils.numbers import round_half_up

logger = get_logger(__name__)

PROFILE_COMPLETENESS_FIELDS = (
    "f_name", "l_name", "email", "register_number", "cgpa", "branch", "academic_year"
)

# (minimum CGPA, bonus) from the top band down
ACADEMIC_CGPA_BANDS = ((9.0, 40), (8.5, 35), (8.0, 30), (7.5, 25))
ACADEMIC_BASE_SCORE = 50
ACADEMIC_FLOOR_BONUS = 15
ZERO_BACKLOG_BONUS = 10

INELIGIBLE_RECOMMENDATION = "You do not meet the eligibility criteria for this job"


def _format_number(value: float) -> str:
    return f"{value:g}"


# ============================================================
# SKILL MATCHING
# ============================================================

def find_matching_skills(
    candidate_skills: List[str],
    required_skills: List[str]
) -> Tuple[List[str], List[str]]:
    """
    Split required skills into matched and missing.

    A required skill is matched when any candidate skill is a substring of
    it or vice versa. Required skills keep their original spelling.
    """
    candidates = [s.strip().lower() for s in candidate_skills if s and s.strip()]
    matched = []
    missing = []
    for required in required_skills:
        if any(match_skill(candidate, required) for candidate in candidates):
            matched.append(required)
        else:
            missing.append(required)
    return matched, missing


# ============================================================
# ATS SCORING SERVICE
# ============================================================

class ATSScoringService:
    """
    Computes MatchReports.

    Weights and the neutral skills score come from Settings
    (50% skills / 20% completeness / 30% academics by default).
    """

    def __init__(self, settings: Settings = None):
        self.settings = settings or get_settings()

    def evaluate(
        self,
        profile: CandidateProfile,
        candidate_skills: Optional[List[str]],
        job: JobRequirement
    ) -> MatchReport:
        """
        Evaluate a candidate against a job.

        Args:
            profile: Stored candidate profile
            candidate_skills: Candidate skill tokens (defaults to profile.skills)
            job: Job requirement record

        Returns:
            MatchReport; ineligible candidates get overall_score 0
        """
        require(profile is not None, "Candidate profile is required", argument="profile")
        require(job is not None, "Job requirement is required", argument="job")
        skills = list(candidate_skills) if candidate_skills is not None else list(profile.skills)

        # 1. ELIGIBILITY CHECKS (pass/fail, no partial credit)
        checks = self.check_eligibility(profile, job)
        if not checks.all_passed:
            logger.info(f"Candidate ineligible for '{job.title}': {'; '.join(checks.reasons)}")
            return MatchReport(
                overall_score=0,
                eligible=False,
                eligibility_checks=checks,
                recommendations=[INELIGIBLE_RECOMMENDATION]
            )

        # 2. SKILLS MATCHING
        skills_analysis = self.analyze_skills(skills, job.skills)

        # 3. PROFILE COMPLETENESS
        completeness, missing_fields = self.calculate_profile_completeness(profile)

        # 4. ACADEMIC PERFORMANCE
        academic = self.calculate_academic_score(profile)

        overall = round_half_up(
            skills_analysis.score * self.settings.skills_weight
            + completeness * self.settings.completeness_weight
            + academic * self.settings.academic_weight
        )

        recommendations = []
        if missing_fields:
            recommendations.append(f"Complete profile: {', '.join(missing_fields)}")
        recommendations.append(self.recommendation_for(overall))

        logger.info(
            f"Match for '{job.title}': overall={overall} "
            f"(skills={skills_analysis.score}, completeness={completeness}, academic={academic})"
        )

        return MatchReport(
            overall_score=overall,
            eligible=True,
            eligibility_checks=checks,
            skills_analysis=skills_analysis,
            breakdown=ScoreBreakdown(
                skills=skills_analysis.score,
                profile_completeness=completeness,
                academic_performance=academic
            ),
            missing_profile_fields=missing_fields,
            recommendations=recommendations
        )

    def check_eligibility(self, profile: CandidateProfile, job: JobRequirement) -> EligibilityChecks:
        """Run every hard gate independently."""
        require(profile is not None, "Candidate profile is required", argument="profile")
        require(job is not None, "Job requirement is required", argument="job")

        placement = EligibilityCheck(message="Not yet placed")
        if profile.placement_status == PlacementStatus.placed:
            placement = EligibilityCheck(
                passed=False,
                message="You are already placed and cannot apply for more positions"
            )

        # Unknown CGPA passes the gate
        cgpa_check = EligibilityCheck(message="No CGPA requirement")
        if job.min_cgpa is not None:
            if profile.cgpa is None:
                cgpa_check = EligibilityCheck(
                    message=f"CGPA not specified; minimum required is {_format_number(job.min_cgpa)}"
                )
            elif profile.cgpa < job.min_cgpa:
                cgpa_check = EligibilityCheck(
                    passed=False,
                    message=f"Required CGPA: {_format_number(job.min_cgpa)}, Your CGPA: {_format_number(profile.cgpa)}"
                )
            else:
                cgpa_check = EligibilityCheck(
                    message=f"CGPA requirement met ({_format_number(profile.cgpa)} >= {_format_number(job.min_cgpa)})"
                )

        # Unknown backlog count is treated as zero
        backlogs_check = EligibilityCheck(message="No backlog restriction")
        if job.max_backlogs is not None:
            backlogs = profile.backlogs or 0
            if backlogs > job.max_backlogs:
                backlogs_check = EligibilityCheck(
                    passed=False,
                    message=f"Maximum backlogs: {job.max_backlogs}, Yours: {backlogs}"
                )
            else:
                backlogs_check = EligibilityCheck(
                    message=f"Backlog requirement met ({backlogs} <= {job.max_backlogs})"
                )

        # Unknown branch fails a restricted job
        branch_check = EligibilityCheck(message="Open to all branches")
        if job.allowed_branches:
            allowed = [b.value for b in job.allowed_branches]
            branch = profile.branch.value if profile.branch else None
            if branch is None or branch not in allowed:
                branch_check = EligibilityCheck(
                    passed=False,
                    message=f"Allowed: {', '.join(allowed)}, Yours: {branch or 'Not specified'}"
                )
            else:
                branch_check = EligibilityCheck(message=f"{branch} is allowed")

        gates = (placement, cgpa_check, backlogs_check, branch_check)
        reasons = [gate.message for gate in gates if not gate.passed]

        return EligibilityChecks(
            placement_check=placement,
            cgpa_check=cgpa_check,
            backlogs_check=backlogs_check,
            branch_check=branch_check,
            all_passed=not reasons,
            reasons=reasons
        )

    def analyze_skills(self, candidate_skills: List[str], job_skills: List[str]) -> SkillsAnalysis:
        """
        Skills component.

        Score is the matched share of required skills; a job without
        required skills cannot be evaluated and gets the neutral score.
        """
        required = [s.strip() for s in job_skills if s and s.strip()]
        if not required:
            return SkillsAnalysis(score=self.settings.neutral_skills_score)

        matched, missing = find_matching_skills(candidate_skills, required)
        percentage = round_half_up(100 * len(matched) / len(required))

        return SkillsAnalysis(
            score=percentage,
            matching_skills=matched,
            missing_skills=missing,
            match_percentage=percentage
        )

    def calculate_profile_completeness(self, profile: CandidateProfile) -> Tuple[int, List[str]]:
        """Share of populated profile fields, plus the missing field names."""
        missing = [
            field for field in PROFILE_COMPLETENESS_FIELDS
            if getattr(profile, field) in (None, "")
        ]
        filled = len(PROFILE_COMPLETENESS_FIELDS) - len(missing)
        return round_half_up(filled / len(PROFILE_COMPLETENESS_FIELDS) * 100), missing

    def calculate_academic_score(self, profile: CandidateProfile) -> int:
        score = ACADEMIC_BASE_SCORE
        if profile.cgpa is not None:
            bonus = ACADEMIC_FLOOR_BONUS
            for threshold, band_bonus in ACADEMIC_CGPA_BANDS:
                if profile.cgpa >= threshold:
                    bonus = band_bonus
                    break
            score += bonus
        if (profile.backlogs or 0) == 0:
            score += ZERO_BACKLOG_BONUS
        return min(score, 100)

    def recommendation_for(self, overall_score: int) -> str:
        """Human-readable verdict for an overall score."""
        if overall_score >= self.settings.excellent_threshold:
            return "Excellent match! You are a strong candidate for this position."
        if overall_score >= self.settings.good_threshold:
            return "Good match! Consider applying to this position."
        if overall_score >= self.settings.moderate_threshold:
            return "Moderate match. You may want to upskill before applying."
        return "Low match. Consider developing relevant skills first."


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_scoring_service() -> ATSScoringService:
    """Get scoring service instance."""
    return ATSScoringService()
