"""
Resume Quality Advisor

PURPOSE:
Tell a student what to fix in their resume so the extractors (and real ATS
systems) can read it.

HOW IT WORKS:
1. Fixed checklist of fields; each missing one produces a prioritized suggestion
2. Independent "ATS readiness" points (contact / education / skills / name)
3. Readiness percentage -> rating band
4. One-paragraph summary templated from the counts and rating

A field counts as present when either the fresh extraction or the stored
profile has it. Skill counts come from the extraction only.
"""

from typing import List, Optional

from placement_ats.core.exceptions import require
from placement_ats.core.logging_config import get_logger
from placement_ats.schemas.schemas import (
    ATSReadiness,
    CandidateProfile,
    ImpactLevel,
    ParsedResume,
    ReadinessRating,
    Suggestion,
    SuggestionReport
)
from placement_ats.utils.numbers import round_half_up

logger = get_logger(__name__)

MAX_READINESS_SCORE = 100
MIN_SKILLS = 5
GOOD_SKILLS = 10
EXCELLENT_SKILLS = 15

# (minimum percentage, level, color)
RATING_BANDS = (
    (90, "Excellent", "green"),
    (75, "Good", "blue"),
    (60, "Fair", "orange"),
)
FALLBACK_RATING = ("Needs Improvement", "red")


def _present(*values) -> bool:
    return any(value not in (None, "") for value in values)


def get_rating(percentage: int) -> ReadinessRating:
    for minimum, level, color in RATING_BANDS:
        if percentage >= minimum:
            return ReadinessRating(level=level, color=color)
    level, color = FALLBACK_RATING
    return ReadinessRating(level=level, color=color)


class ResumeSuggestionService:
    """Builds SuggestionReports from a resume extraction and the stored profile."""

    def advise(
        self,
        parsed: ParsedResume,
        profile: Optional[CandidateProfile] = None
    ) -> SuggestionReport:
        """
        Review a resume extraction.

        Args:
            parsed: Fresh resume extraction
            profile: Stored candidate profile, if the candidate has one

        Returns:
            SuggestionReport with suggestions sorted by priority
        """
        require(parsed is not None, "Parsed resume is required", argument="parsed")
        profile = profile or CandidateProfile()

        suggestions: List[Suggestion] = []
        warnings: List[str] = []
        missing: List[str] = []
        skill_count = len(parsed.skills)

        if not _present(parsed.cgpa, profile.cgpa):
            missing.append("CGPA/GPA")
            suggestions.append(Suggestion(
                field="CGPA",
                issue="CGPA not found in resume",
                suggestion='Add your CGPA clearly in the education section (e.g., "CGPA: 8.09/10" or "Grade: 8.09")',
                impact=ImpactLevel.high,
                priority=1
            ))

        if not _present(parsed.academic_year, profile.academic_year):
            missing.append("Academic Year")
            suggestions.append(Suggestion(
                field="Academic Year",
                issue="Year of admission not found",
                suggestion='Clearly mention your admission year (e.g., "Bachelor of Technology (2022-2026)" or "Batch of 2022")',
                impact=ImpactLevel.high,
                priority=2
            ))

        if skill_count < MIN_SKILLS:
            warnings.append("Limited technical skills detected")
            suggestions.append(Suggestion(
                field="Skills",
                issue=f"Only {skill_count} skills detected",
                suggestion='Add a dedicated "Technical Skills" or "Skills" section with relevant technologies, programming languages, and tools',
                impact=ImpactLevel.high,
                priority=3
            ))

        if not _present(parsed.register_number, profile.register_number):
            warnings.append("Register number not found (but can be entered during registration)")

        if not _present(parsed.phone, profile.phone):
            missing.append("Phone Number")
            suggestions.append(Suggestion(
                field="Contact",
                issue="Phone number not detected",
                suggestion='Add your phone number in the contact section clearly (e.g., "+91-1234567890" or "Phone: 1234567890")',
                impact=ImpactLevel.medium,
                priority=4
            ))

        if not _present(parsed.email, profile.email):
            missing.append("Email")
            suggestions.append(Suggestion(
                field="Contact",
                issue="Email not detected",
                suggestion="Add your professional email address in the contact section",
                impact=ImpactLevel.high,
                priority=5
            ))

        if MIN_SKILLS <= skill_count < GOOD_SKILLS:
            suggestions.append(Suggestion(
                field="Skills",
                issue="Good skill count but could be improved",
                suggestion="Consider adding more relevant skills like frameworks, databases, or tools you know",
                impact=ImpactLevel.low,
                priority=6
            ))

        readiness = self.calculate_readiness(parsed, profile)
        summary = self.generate_summary(readiness, len(missing), len(warnings))

        logger.info(
            f"Resume readiness {readiness.percentage}% ({readiness.rating.level}): "
            f"{len(missing)} missing, {len(warnings)} warnings"
        )

        return SuggestionReport(
            ats_readiness=readiness,
            missing=missing,
            warnings=warnings,
            suggestions=sorted(suggestions, key=lambda s: s.priority),
            summary=summary
        )

    def calculate_readiness(
        self,
        parsed: ParsedResume,
        profile: Optional[CandidateProfile] = None
    ) -> ATSReadiness:
        """
        Readiness points:
        - Contact (20): email 10, phone 10
        - Education (30): CGPA 15, academic year 10, branch 5
        - Skills (40): 40 / 30 / 20 / 10 for >=15 / >=10 / >=5 / fewer
        - Name (10): first and last name
        """
        profile = profile or CandidateProfile()
        score = 0

        if _present(parsed.email, profile.email):
            score += 10
        if _present(parsed.phone, profile.phone):
            score += 10

        if _present(parsed.cgpa, profile.cgpa):
            score += 15
        if _present(parsed.academic_year, profile.academic_year):
            score += 10
        if _present(parsed.branch, profile.branch):
            score += 5

        skill_count = len(parsed.skills)
        if skill_count >= EXCELLENT_SKILLS:
            score += 40
        elif skill_count >= GOOD_SKILLS:
            score += 30
        elif skill_count >= MIN_SKILLS:
            score += 20
        else:
            score += 10

        if parsed.f_name and parsed.l_name:
            score += 10

        percentage = round_half_up(score / MAX_READINESS_SCORE * 100)
        return ATSReadiness(
            score=score,
            max_score=MAX_READINESS_SCORE,
            percentage=percentage,
            rating=get_rating(percentage)
        )

    def generate_summary(self, readiness: ATSReadiness, missing_count: int, warnings_count: int) -> str:
        percentage = readiness.percentage
        parts = [f"Your resume is {readiness.rating.level.lower()} for ATS systems ({percentage}%)."]

        if missing_count > 0:
            verb = "fields are" if missing_count > 1 else "field is"
            parts.append(f"{missing_count} critical {verb} missing.")

        if warnings_count > 0:
            if warnings_count > 1:
                parts.append(f"There are {warnings_count} areas that could be improved.")
            else:
                parts.append("There is 1 area that could be improved.")

        if percentage >= 90:
            parts.append("Great job! Your resume is well-optimized for ATS.")
        elif percentage >= 75:
            parts.append("Your resume is good but there's room for improvement.")
        else:
            parts.append("Consider updating your resume with the suggested improvements.")

        return " ".join(parts)


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_suggestion_service() -> ResumeSuggestionService:
    """Get suggestion service instance."""
    return ResumeSuggestionService()
