import pytest

from placement_ats.core.config import Settings
from placement_ats.core.exceptions import ContractViolationError
from placement_ats.schemas.schemas import (
    BranchCode,
    CandidateProfile,
    JobRequirement,
    ParsedJobDescription,
    ParsedResume
)
from placement_ats.services.parsing_service import (
    JobDescriptionParsingService,
    ResumeParsingService,
    build_job_requirement,
    calculate_resume_ats_score,
    looks_like_failed_extraction,
    merge_profile
)


class TestResumeParsingService:
    """Test cases for the resume extraction pipeline"""

    def test_parse_full_resume(self, resume_text):
        """Test every field is extracted from a well-formed resume"""
        parsed = ResumeParsingService().parse(resume_text)

        assert parsed.f_name == "Priya"
        assert parsed.m_name == "Ramesh"
        assert parsed.l_name == "Kumar"
        assert parsed.email == "priya.kumar@example.com"
        assert parsed.phone == "+91 9876543210"
        assert parsed.cgpa == 8.09
        assert parsed.branch == BranchCode.CSE
        assert parsed.academic_year == 2021
        assert {"python", "java", "react", "node.js", "docker", "c++", "django"} <= set(parsed.skills)

    def test_parse_skills_sorted(self, resume_text):
        """Test skills come back in a stable order"""
        parsed = ResumeParsingService().parse(resume_text)

        assert parsed.skills == sorted(parsed.skills)

    def test_parse_with_custom_vocabulary(self, resume_text, small_vocabulary):
        """Test injected vocabulary replaces the default one"""
        parsed = ResumeParsingService(vocabulary=small_vocabulary).parse(resume_text)

        assert parsed.skills == ["c++", "node.js", "python", "react"]

    def test_parse_truncates_raw_text(self):
        """Test raw text is capped by settings"""
        settings = Settings(resume_raw_text_limit=20)
        text = "Priya Kumar\n" + "python " * 50

        parsed = ResumeParsingService(settings=settings).parse(text)

        assert len(parsed.raw_text) == 20

    def test_parse_empty_fields_are_none(self):
        """Test fields not found stay None"""
        parsed = ResumeParsingService().parse("Asha Rao\nLikes hiking and painting")

        assert parsed.email is None
        assert parsed.phone is None
        assert parsed.cgpa is None
        assert parsed.branch is None
        assert parsed.academic_year is None
        assert parsed.skills == []

    def test_parse_rejects_non_string(self):
        """Test None input fails fast"""
        with pytest.raises(ContractViolationError) as exc_info:
            ResumeParsingService().parse(None)

        assert exc_info.value.details["argument"] == "resume_text"

    def test_parse_is_deterministic(self, resume_text):
        """Test identical input gives identical output"""
        service = ResumeParsingService()

        assert service.parse(resume_text) == service.parse(resume_text)


class TestFailedExtraction:
    """Test cases for garbage-text detection"""

    def test_normal_name_is_fine(self):
        """Test a readable name passes"""
        assert looks_like_failed_extraction(ParsedResume(f_name="Priya", l_name="Kumar")) is False

    def test_empty_name_fails(self):
        """Test missing name flags failure"""
        assert looks_like_failed_extraction(ParsedResume()) is True

    def test_pdf_marker_fails(self):
        """Test binary PDF header decoded as a name flags failure"""
        assert looks_like_failed_extraction(ParsedResume(f_name="%PDF-1.4")) is True

    def test_very_long_name_fails(self):
        """Test absurdly long names flag failure"""
        assert looks_like_failed_extraction(ParsedResume(f_name="x" * 101)) is True


class TestMergeProfile:
    """Test cases for applying an extraction to a stored profile"""

    def test_extracted_values_overwrite(self, full_profile):
        """Test non-null extracted values replace stored ones"""
        parsed = ParsedResume(f_name="Priyanka", cgpa=9.1, skills=["java"])

        merged = merge_profile(full_profile, parsed)

        assert merged.f_name == "Priyanka"
        assert merged.cgpa == 9.1
        assert merged.skills == ["java"]

    def test_null_values_keep_stored(self, full_profile):
        """Test missing extracted values keep stored ones"""
        merged = merge_profile(full_profile, ParsedResume())

        assert merged.email == full_profile.email
        assert merged.cgpa == full_profile.cgpa
        assert merged.branch == full_profile.branch
        assert merged.skills == full_profile.skills
        assert merged.register_number == full_profile.register_number

    def test_merge_does_not_mutate(self, full_profile):
        """Test the stored profile is left untouched"""
        merge_profile(full_profile, ParsedResume(f_name="Other"))

        assert full_profile.f_name == "Priya"

    def test_merge_without_existing_profile(self):
        """Test a new profile is created from the extraction"""
        merged = merge_profile(None, ParsedResume(f_name="Asha", l_name="Rao", branch="IT"))

        assert merged.f_name == "Asha"
        assert merged.branch == BranchCode.IT
        assert merged.placement_status.value == "unplaced"

    def test_merge_truncates_long_strings(self):
        """Test string fields are capped at 255 characters"""
        merged = merge_profile(None, ParsedResume(f_name="a" * 300))

        assert len(merged.f_name) == 255


class TestResumeATSScore:
    """Test cases for the stored profile-level score"""

    def test_score_complete_resume(self, resume_text):
        """Test skills, CGPA band and completeness add up"""
        parsed = ResumeParsingService().parse(resume_text)

        # 40 (10+ skills) + 25 (CGPA 8.x) + 10 + 5 + 5 + 5 (no register number)
        assert calculate_resume_ats_score(parsed) == 90

    def test_score_uses_profile_fallbacks(self):
        """Test profile CGPA, branch and register number count"""
        parsed = ParsedResume(skills=["python", "java"])
        profile = CandidateProfile(cgpa=9.2, branch="ECE", register_number="21EC001")

        # 8 (2 skills) + 30 + 5 + 5
        assert calculate_resume_ats_score(parsed, profile) == 48

    def test_score_empty(self):
        """Test nothing found scores zero"""
        assert calculate_resume_ats_score(ParsedResume()) == 0


class TestJobDescriptionParsingService:
    """Test cases for the JD extraction pipeline"""

    def test_parse_full_jd(self, jd_text):
        """Test every requirement is extracted"""
        parsed = JobDescriptionParsingService().parse(jd_text)

        assert parsed.skills == ["aws", "python", "react"]
        assert parsed.min_cgpa == 7.5
        assert parsed.max_backlogs == 0
        assert parsed.allowed_branches == [BranchCode.CSE, BranchCode.IT]
        assert parsed.package_lpa == 12.0
        assert parsed.description.startswith("Software Engineer")

    def test_parse_scenario_requirements(self):
        """Test CGPA cutoff and zero backlogs in one line"""
        parsed = JobDescriptionParsingService().parse("Required CGPA: 7.0, Max Backlogs: 0")

        assert parsed.min_cgpa == 7.0
        assert parsed.max_backlogs == 0
        assert parsed.allowed_branches is None

    def test_parse_truncates_description(self):
        """Test description is capped by settings"""
        settings = Settings(jd_description_limit=10)

        parsed = JobDescriptionParsingService(settings=settings).parse("A" * 50)

        assert parsed.description == "A" * 10

    def test_parse_rejects_non_string(self):
        """Test None input fails fast"""
        with pytest.raises(ContractViolationError):
            JobDescriptionParsingService().parse(None)


class TestBuildJobRequirement:
    """Test cases for combining manual fields with a parsed JD"""

    def test_manual_values_win(self):
        """Test provided manual values override parsed ones"""
        parsed = ParsedJobDescription(skills=["python"], min_cgpa=7.0, max_backlogs=2, package_lpa=6)

        job = build_job_requirement(
            "SDE", parsed, skills=["Java"], min_cgpa=8.0, max_backlogs=0, package_lpa=10
        )

        assert job.skills == ["Java"]
        assert job.min_cgpa == 8.0
        assert job.max_backlogs == 0
        assert job.package_lpa == 10

    def test_parsed_values_fill_gaps(self):
        """Test parsed values are used where nothing was entered"""
        parsed = ParsedJobDescription(
            skills=["python"], min_cgpa=7.0, max_backlogs=1,
            allowed_branches=["CSE"], description="Backend role"
        )

        job = build_job_requirement("SDE", parsed)

        assert job.title == "SDE"
        assert job.skills == ["python"]
        assert job.min_cgpa == 7.0
        assert job.max_backlogs == 1
        assert job.allowed_branches == [BranchCode.CSE]
        assert job.description == "Backend role"

    def test_without_parsed_jd(self):
        """Test manual-only job"""
        job = build_job_requirement("SDE", allowed_branches=["cse", "it"])

        assert job.allowed_branches == [BranchCode.CSE, BranchCode.IT]
        assert job.min_cgpa is None

    def test_manual_zero_cgpa_wins(self):
        """Test a manual CGPA cutoff of 0 is kept over the parsed one"""
        parsed = ParsedJobDescription(min_cgpa=7.0, package_lpa=6)

        job = build_job_requirement("SDE", parsed, min_cgpa=0.0, package_lpa=0)

        assert job.min_cgpa == 0.0
        # zero package means not entered
        assert job.package_lpa == 6

    def test_single_branch_string(self):
        """Test a bare branch string is read as a one-item list"""
        job = JobRequirement(title="SDE", allowed_branches=" cse ")

        assert job.allowed_branches == [BranchCode.CSE]
