import pytest
from pydantic import ValidationError

from placement_ats.core.exceptions import ConfigurationError
from placement_ats.core.vocabulary import (
    BranchKeywordTable,
    SkillVocabulary,
    default_jd_branch_table,
    default_resume_branch_table,
    default_skill_vocabulary
)
from placement_ats.schemas.schemas import BranchCode


class TestSkillVocabulary:
    """Test cases for the skill token set"""

    def test_tokens_are_normalized(self):
        """Test tokens are lowercased and trimmed"""
        vocabulary = SkillVocabulary.from_tokens(["  Python ", "REACT", ""])

        assert vocabulary.sorted_tokens() == ["python", "react"]
        assert len(vocabulary) == 2

    def test_membership_ignores_case(self):
        """Test membership check normalizes the probe"""
        vocabulary = SkillVocabulary.from_tokens(["node.js"])

        assert "Node.JS" in vocabulary
        assert "java" not in vocabulary

    def test_empty_vocabulary_rejected(self):
        """Test an empty vocabulary is a configuration error"""
        with pytest.raises(ValidationError):
            SkillVocabulary.from_tokens([])

    def test_vocabulary_is_immutable(self):
        """Test vocabulary cannot be reassigned"""
        vocabulary = default_skill_vocabulary()

        with pytest.raises(ValidationError):
            vocabulary.skills = frozenset({"cobol"})

    def test_default_vocabulary(self):
        """Test default vocabulary carries the common stacks"""
        vocabulary = default_skill_vocabulary()

        for token in ("python", "c++", "node.js", "machine learning", "aws"):
            assert token in vocabulary


class TestBranchKeywordTable:
    """Test cases for the ordered branch table"""

    def test_default_order(self):
        """Test default iteration order"""
        table = default_resume_branch_table()

        assert table.order == [
            BranchCode.CSE, BranchCode.ECE, BranchCode.EEE,
            BranchCode.MECH, BranchCode.CIVIL, BranchCode.IT
        ]

    def test_resume_table_is_wider(self):
        """Test resume table has extra CSE variants"""
        assert "computer" in default_resume_branch_table().keywords_for(BranchCode.CSE)
        assert "computer" not in default_jd_branch_table().keywords_for(BranchCode.CSE)

    def test_from_dict(self):
        """Test tables can be built from a mapping"""
        table = BranchKeywordTable(entries={"it": ["Information Technology"], "CSE": ["cse"]})

        assert table.order == [BranchCode.IT, BranchCode.CSE]
        assert table.keywords_for(BranchCode.IT) == ("information technology",)
        assert table.keywords_for(BranchCode.MECH) == ()

    def test_duplicate_branch_rejected(self):
        """Test a branch may appear only once"""
        with pytest.raises(ValidationError):
            BranchKeywordTable(entries=[("CSE", ["cs"]), ("CSE", ["cse"])])

    def test_unknown_branch_rejected(self):
        """Test branch codes are validated"""
        with pytest.raises(ValidationError):
            BranchKeywordTable(entries=[("AERO", ["aerospace"])])

    def test_with_order(self):
        """Test explicit precedence"""
        table = default_jd_branch_table().with_order(["IT", "CIVIL", "MECH", "EEE", "ECE", "CSE"])

        assert table.order[0] == BranchCode.IT
        assert table.keywords_for(BranchCode.CSE) == default_jd_branch_table().keywords_for(BranchCode.CSE)

    def test_with_order_must_be_permutation(self):
        """Test partial orders are rejected"""
        with pytest.raises(ConfigurationError) as exc_info:
            default_jd_branch_table().with_order(["CSE", "IT"])

        assert exc_info.value.details["config_key"] == "branch_order"
