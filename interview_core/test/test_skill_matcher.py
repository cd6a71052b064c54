"""
Test Skill Matcher Module

Dependencies:
- pytest: For testing framework
- interview_core.services.skill_matcher: The module being tested
"""

import pytest
from interview_core.errors.exceptions import InvalidInput
from interview_core.services.skill_matcher import match_skills, skills_match


class TestSkillsMatch:
    """Test the pairwise matching rule."""

    def test_case_insensitive(self):
        assert skills_match("python", "Python")

    def test_substring_in_either_direction(self):
        assert skills_match("React", "React Native")
        assert skills_match("Node.js", "Node")

    def test_unrelated_skills(self):
        assert not skills_match("Go", "Rust")

    def test_substring_false_positive_is_accepted(self):
        # Known limitation of substring matching
        assert skills_match("Java", "JavaScript")


class TestMatchSkills:
    """Test the full gap analysis."""

    def test_partial_match(self):
        result = match_skills(["Python", "Docker"], ["python", "Kubernetes", "docker", "AWS"])

        assert result.matching_skills == ["python", "docker"]
        assert result.skill_gaps == ["Kubernetes", "AWS"]
        assert result.match_percentage == 50
        assert result.gap_percentage == 50

    def test_react_and_node_against_react_and_aws(self):
        result = match_skills(["React", "Node.js"], ["react", "aws"])

        assert result.matching_skills == ["react"]
        assert result.skill_gaps == ["aws"]
        assert (result.match_percentage, result.gap_percentage) == (50, 50)

    def test_every_job_skill_is_either_matched_or_a_gap(self):
        job_skills = ["SQL", "Python", "Terraform"]
        result = match_skills(["python"], job_skills)

        assert sorted(result.matching_skills + result.skill_gaps) == sorted(job_skills)
        assert set(result.matching_skills).isdisjoint(result.skill_gaps)

    def test_percentages_round_half_up(self):
        # 1 of 8 matched: 12.5% -> 13, 87.5% -> 88
        job_skills = ["a1", "b2", "c3", "d4", "e5", "f6", "g7", "h8"]
        result = match_skills(["a1"], job_skills)

        assert result.match_percentage == 13
        assert result.gap_percentage == 88

    def test_thirds(self):
        result = match_skills(["sql"], ["SQL", "Python", "Go"])
        assert result.match_percentage == 33
        assert result.gap_percentage == 67

    def test_empty_job_skills(self):
        result = match_skills(["Python"], [])

        assert result.skill_gaps == []
        assert result.matching_skills == []
        assert result.gap_percentage == 0
        assert result.match_percentage == 0

    def test_empty_candidate_skills(self):
        result = match_skills([], ["Python", "SQL"])

        assert result.skill_gaps == ["Python", "SQL"]
        assert result.gap_percentage == 100
        assert result.match_percentage == 0

    def test_blank_entries_are_ignored(self):
        result = match_skills(["", "   "], ["Python", " "])

        assert result.skill_gaps == ["Python"]
        assert result.gap_percentage == 100

    def test_duplicate_job_skills_collapsed(self):
        result = match_skills(["python"], ["Python", "Python", "Go"])

        assert result.matching_skills == ["Python"]
        assert result.skill_gaps == ["Go"]
        assert result.match_percentage == 50

    @pytest.mark.parametrize("candidate, job", [(None, ["Python"]), (["Python"], None), ("Python", ["Python"])])
    def test_missing_or_invalid_lists(self, candidate, job):
        with pytest.raises(InvalidInput):
            match_skills(candidate, job)
