"""
Skill Matcher

Compares a candidate's skills with the skills a job requires. Two skills match
when, ignoring case, either one contains the other, so "React" matches
"React Native" and "Node" matches "Node.js".
"""
import math
from typing import Iterable, List, Optional
from interview_core.errors.exceptions import InvalidInput
from interview_core.schemas.skill_schemas import SkillMatchResult


def _normalize(skills: Iterable[str]) -> List[str]:
    # Blank entries would be a substring of everything
    cleaned = [str(skill).strip() for skill in skills if skill is not None and str(skill).strip()]
    return list(dict.fromkeys(cleaned))


def _percentage(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    # Half-up rounding; round() would round 12.5 down to 12
    return int(math.floor(100 * part / whole + 0.5))


def skills_match(candidate_skill: str, job_skill: str) -> bool:
    candidate = candidate_skill.lower()
    job = job_skill.lower()
    return candidate in job or job in candidate


def match_skills(candidate_skills: Optional[Iterable[str]], job_skills: Optional[Iterable[str]]) -> SkillMatchResult:
    """
    Split the job's skills into those the candidate covers and those they lack.

    Args:
        candidate_skills: Skills from the candidate profile
        job_skills: Skills the job requires

    Returns:
        SkillMatchResult: gaps and matches in job order, with percentages of the job skills

    Raises:
        InvalidInput: If either list is missing
    """
    if candidate_skills is None or job_skills is None:
        raise InvalidInput("Both candidate and job skills are required")
    if isinstance(candidate_skills, str) or isinstance(job_skills, str):
        raise InvalidInput("Skills must be given as lists")

    candidates = _normalize(candidate_skills)
    jobs = _normalize(job_skills)

    matching_skills = [job for job in jobs if any(skills_match(candidate, job) for candidate in candidates)]
    skill_gaps = [job for job in jobs if job not in matching_skills]

    return SkillMatchResult(
        skill_gaps=skill_gaps,
        matching_skills=matching_skills,
        gap_percentage=_percentage(len(skill_gaps), len(jobs)),
        match_percentage=_percentage(len(matching_skills), len(jobs)),
    )
