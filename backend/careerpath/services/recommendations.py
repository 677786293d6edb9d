"""
Career Recommendation Generator

Fills a user's career recommendation set after an assessment is submitted.
Runs synchronously inside the assessment request; there is no queue and no
retry.

Strategies:
    random        First N catalog career paths, each with a uniform random
                  integer score in [60, 100] and the same three reasons.
                  Kept for compatibility with existing data.
    skill_overlap Deterministic. Scores every career path by how much of its
                  required skill list the user already has, weighted by the
                  user's current level, mapped into [60, 100]. Keeps the best N.

Either way rows are inserted with insert-or-ignore: a career path the user
was already recommended keeps its original score and bookmark.

Usage:
    generator = RecommendationGenerator(Storage(session), strategy="skill_overlap")
    inserted = await generator.generate(user_id)
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from careerpath.middleware.metrics import record_recommendations_generated
from careerpath.models import CareerPath, UserSkill
from careerpath.services.storage import Storage

logger = logging.getLogger(__name__)

MIN_SCORE = 60
MAX_SCORE = 100
MAX_LEVEL = 5

DEFAULT_REASONS = [
    "Strong skill alignment",
    "Growing market demand",
    "Matches your experience level",
]


@dataclass
class ScoredCareer:
    """
    A career path with its computed match.

    Attributes:
        career_path_id: CareerPath primary key
        match_score: 0-100 fit score
        reasons: Human-readable explanations, most important first
    """
    career_path_id: str
    match_score: float
    reasons: List[str] = field(default_factory=list)

    def to_row(self) -> dict:
        return {
            "career_path_id": self.career_path_id,
            "match_score": self.match_score,
            "reasons": list(self.reasons),
        }


def random_scores(
    career_paths: List[CareerPath],
    limit: int,
    rng: random.Random,
) -> List[ScoredCareer]:
    """First `limit` paths in catalog order with a random score each."""
    return [
        ScoredCareer(
            career_path_id=path.id,
            match_score=float(rng.randint(MIN_SCORE, MAX_SCORE)),
            reasons=list(DEFAULT_REASONS),
        )
        for path in career_paths[:limit]
    ]


def _skill_levels(user_skills: List[UserSkill]) -> Dict[str, int]:
    return {us.skill.name.strip().lower(): us.current_level for us in user_skills}


def score_career_path(career_path: CareerPath, levels: Dict[str, int]) -> ScoredCareer:
    """
    Score one career path against the user's skill levels.

    coverage = sum(level / 5 for each required skill the user has) / required
    score    = 60 + 40 * coverage, rounded to 2 decimals

    A path with no required skills scores the minimum.
    """
    required = [s for s in (career_path.required_skills or []) if s and s.strip()]
    matched = [s for s in required if s.strip().lower() in levels]
    missing = [s for s in required if s.strip().lower() not in levels]

    if required:
        weighted = sum(min(levels[s.strip().lower()], MAX_LEVEL) / MAX_LEVEL for s in matched)
        coverage = weighted / len(required)
    else:
        coverage = 0.0

    score = round(MIN_SCORE + (MAX_SCORE - MIN_SCORE) * coverage, 2)

    reasons = [f"You have {len(matched)} of {len(required)} required skills"]
    if matched:
        reasons.append("Matching skills: " + ", ".join(matched[:3]))
    if missing:
        reasons.append("Skills to develop: " + ", ".join(missing[:3]))
    if (career_path.demand_level or "").lower() == "high":
        reasons.append("High market demand")
    if (career_path.growth_outlook or "").lower() == "growing":
        reasons.append("Growing field")

    return ScoredCareer(career_path_id=career_path.id, match_score=score, reasons=reasons)


def skill_overlap_scores(
    career_paths: List[CareerPath],
    user_skills: List[UserSkill],
    limit: int,
) -> List[ScoredCareer]:
    """Best `limit` paths by skill overlap; ties keep catalog order."""
    levels = _skill_levels(user_skills)
    scored = [score_career_path(path, levels) for path in career_paths]
    scored.sort(key=lambda s: s.match_score, reverse=True)
    return scored[:limit]


class RecommendationGenerator:
    """
    Produces and stores career recommendations for one user at a time.

    Attributes:
        storage: Persistence gateway
        strategy: "random" or "skill_overlap"
        limit: Maximum recommendations per generation run
        rng: Random source for the random strategy (seedable in tests)
    """

    STRATEGIES = ("random", "skill_overlap")

    def __init__(
        self,
        storage: Storage,
        strategy: str = "random",
        limit: int = 5,
        rng: Optional[random.Random] = None,
    ):
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown recommendation strategy: {strategy}")
        self.storage = storage
        self.strategy = strategy
        self.limit = limit
        self.rng = rng or random.Random()

    async def score(self, user_id: str) -> List[ScoredCareer]:
        """Compute scores without writing anything."""
        career_paths = await self.storage.get_career_paths()

        if self.strategy == "skill_overlap":
            user_skills = await self.storage.get_skills_with_levels(user_id)
            return skill_overlap_scores(career_paths, user_skills, self.limit)

        return random_scores(career_paths, self.limit, self.rng)

    async def generate(self, user_id: str) -> int:
        """
        Score and insert recommendations for a user.

        Returns:
            Number of new recommendation rows (0 when the user already had
            every selected career path)
        """
        scored = await self.score(user_id)
        inserted = await self.storage.add_career_recommendations(
            user_id, [s.to_row() for s in scored]
        )

        record_recommendations_generated(self.strategy, inserted)
        logger.info(
            f"Generated recommendations for user {user_id}: "
            f"{inserted} new of {len(scored)} scored ({self.strategy})"
        )
        return inserted
