"""
Skill vocabulary and branch keyword tables.

Both are immutable configuration values injected into the parsing services,
so resume and JD extraction share exactly the same tokens and tests can swap
in small custom tables.
"""

from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from placement_ats.core.exceptions import ConfigurationError
from placement_ats.schemas.schemas import BranchCode


class SkillVocabulary(BaseModel):
    """Fixed set of canonical lowercase skill tokens."""

    model_config = ConfigDict(frozen=True)

    skills: FrozenSet[str]

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_tokens(cls, value):
        tokens = frozenset(str(s).strip().lower() for s in value if s and str(s).strip())
        if not tokens:
            raise ValueError("Skill vocabulary must not be empty")
        return tokens

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "SkillVocabulary":
        return cls(skills=tokens)

    def __contains__(self, token: str) -> bool:
        return token.strip().lower() in self.skills

    def __len__(self) -> int:
        return len(self.skills)

    def sorted_tokens(self) -> List[str]:
        return sorted(self.skills)


class BranchKeywordTable(BaseModel):
    """
    Ordered mapping of branch code -> keyword variants.

    Order matters: single-branch extraction returns the first branch in
    `entries` whose keyword occurs in the text. A resume mentioning both
    "computer" and "electronics" resolves to whichever branch comes first.
    Use `with_order` to change the precedence explicitly.
    """

    model_config = ConfigDict(frozen=True)

    entries: Tuple[Tuple[BranchCode, Tuple[str, ...]], ...]

    @field_validator("entries", mode="before")
    @classmethod
    def normalize_entries(cls, value):
        if isinstance(value, dict):
            value = list(value.items())
        normalized = []
        seen = set()
        for branch, keywords in value:
            code = BranchCode(branch.strip().upper() if isinstance(branch, str) else branch)
            if code in seen:
                raise ValueError(f"Duplicate branch in keyword table: {code.value}")
            seen.add(code)
            normalized.append((code, tuple(k.strip().lower() for k in keywords if k.strip())))
        return tuple(normalized)

    @property
    def order(self) -> List[BranchCode]:
        return [code for code, _ in self.entries]

    def keywords_for(self, branch: BranchCode) -> Tuple[str, ...]:
        for code, keywords in self.entries:
            if code == branch:
                return keywords
        return ()

    def with_order(self, order: Sequence[str]) -> "BranchKeywordTable":
        """Return a copy whose iteration order follows `order`."""
        codes = [BranchCode(b.strip().upper() if isinstance(b, str) else b) for b in order]
        if sorted(c.value for c in codes) != sorted(c.value for c in self.order):
            raise ConfigurationError(
                "Branch order must list every branch in the table exactly once",
                config_key="branch_order",
                details={"order": [c.value for c in codes]}
            )
        lookup: Dict[BranchCode, Tuple[str, ...]] = dict(self.entries)
        return BranchKeywordTable(entries=[(code, lookup[code]) for code in codes])


DEFAULT_SKILLS = (
    # Languages
    'python', 'java', 'javascript', 'typescript', 'c++', 'c#', 'c', 'ruby', 'php', 'swift', 'kotlin', 'go', 'rust',
    # Web frameworks
    'react', 'reactjs', 'angular', 'vue', 'vuejs', 'node.js', 'nodejs', 'express', 'django', 'flask',
    'spring boot', 'asp.net',
    'html', 'html5', 'css', 'css3', 'sass', 'scss', 'bootstrap', 'tailwind', 'material ui', 'jquery',
    # Data stores
    'sql', 'mysql', 'postgresql', 'mongodb', 'redis', 'cassandra', 'oracle', 'sqlite', 'nosql', 'dbms',
    # Cloud / devops
    'aws', 'azure', 'gcp', 'google cloud', 'docker', 'kubernetes', 'jenkins', 'ci/cd', 'devops',
    'git', 'github', 'gitlab', 'bitbucket', 'jira', 'agile', 'scrum', 'kanban',
    # ML / data
    'machine learning', 'deep learning', 'ai', 'artificial intelligence', 'data science', 'nlp',
    'computer vision', 'pandas', 'numpy', 'tensorflow', 'pytorch', 'scikit-learn', 'keras', 'opencv', 'yolo',
    'rest api', 'restful', 'graphql', 'microservices', 'websockets', 'grpc', 'api',
    'linux', 'unix', 'bash', 'powershell', 'windows', 'shell scripting',
    'tableau', 'power bi', 'excel', 'data visualization', 'matplotlib', 'seaborn',
    'testing', 'unit testing', 'integration testing', 'selenium', 'jest', 'mocha', 'junit', 'pytest',
    'firebase', 'dynamodb', 'elasticsearch',
    'next.js', 'nuxt.js', 'gatsby', 'redux', 'mobx', 'webpack', 'vite',
    'android', 'ios', 'react native', 'flutter', 'xamarin',
    'photoshop', 'illustrator', 'figma', 'sketch', 'adobe xd', 'ui/ux',
    'blockchain', 'solidity', 'web3', 'ethereum', 'smart contracts',
    'twilio', 'autoencoder', 'u-net', 'neural networks', 'cnn', 'rnn',
    'data structures', 'algorithms', 'oop', 'object-oriented programming', 'vs code', 'visual studio',
)

# Resume table casts a wider net ("computer", "computing", "information systems")
RESUME_BRANCH_KEYWORDS = (
    (BranchCode.CSE, ('computer science', 'cs', 'cse', 'computer engineering', 'computer', 'computing')),
    (BranchCode.ECE, ('electronics', 'ece', 'electronics and communication', 'electronics & communication')),
    (BranchCode.EEE, ('electrical', 'eee', 'electrical engineering', 'electrical & electronics')),
    (BranchCode.MECH, ('mechanical', 'mech', 'mechanical engineering')),
    (BranchCode.CIVIL, ('civil', 'civil engineering')),
    (BranchCode.IT, ('information technology', 'it', 'information science', 'information systems')),
)

JD_BRANCH_KEYWORDS = (
    (BranchCode.CSE, ('computer science', 'cs', 'cse', 'computer engineering')),
    (BranchCode.ECE, ('electronics', 'ece', 'electronics and communication')),
    (BranchCode.EEE, ('electrical', 'eee', 'electrical engineering')),
    (BranchCode.MECH, ('mechanical', 'mech', 'mechanical engineering')),
    (BranchCode.CIVIL, ('civil', 'civil engineering')),
    (BranchCode.IT, ('information technology', 'it', 'information science')),
)


def default_skill_vocabulary() -> SkillVocabulary:
    return SkillVocabulary.from_tokens(DEFAULT_SKILLS)


def default_resume_branch_table() -> BranchKeywordTable:
    return BranchKeywordTable(entries=RESUME_BRANCH_KEYWORDS)


def default_jd_branch_table() -> BranchKeywordTable:
    return BranchKeywordTable(entries=JD_BRANCH_KEYWORDS)
