"""
Secure Prompt Manager Module

This module keeps oracle prompts isolated from candidate data to prevent prompt
injection. Prompts are predefined templates with explicit placeholders, and every
value is sanitized before it is substituted.

The module contains:
- PromptTemplate: A dataclass for secure prompt templates with placeholders
- SecurePromptManager: Main class for rendering the oracle prompts
- sanitize_text: Utility function for text sanitization

Dependencies:
- dataclasses: For template data structures
- re: For regex-based sanitization
- html: For HTML entity encoding
- json: For serializing answer batches
- loguru: For logging operations
"""

import html
import json
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence
from loguru import logger

# Per-field bounds shared by the scoring and summary prompts
ANSWER_MAX_LENGTH = 5000
QUESTION_MAX_LENGTH = 1000
SKILL_TAG_MAX_LENGTH = 100
# Serialized size of one summary entry: every bounded character escapes to at
# most two, plus keys and indentation
SUMMARY_ENTRY_MAX_LENGTH = 2 * (ANSWER_MAX_LENGTH + QUESTION_MAX_LENGTH + SKILL_TAG_MAX_LENGTH) + 200

CONTROL_CHARACTERS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')


def sanitize_text(text: str, max_length: int = 1000, escape_html: bool = True) -> str:
    """
    Sanitize text input to prevent injection attacks and ensure data safety.

    This function performs multiple sanitization steps:
    1. Optional HTML entity encoding to prevent XSS
    2. Strips leading/trailing whitespace
    3. Removes null bytes and other control characters
    4. Configurable length limiting to prevent DoS attacks
    5. Normalizes unicode characters

    Args:
        text (str): The text to sanitize
        max_length (int): Maximum allowed length (default: 1000)
        escape_html (bool): Whether to HTML escape the text (default: True)

    Returns:
        str: The sanitized text

    Raises:
        ValueError: If text is None or empty after sanitization
    """
    if text is None:
        raise ValueError("Text cannot be None")

    # Convert to string if not already
    text = str(text)

    # Optional HTML entity encoding to prevent XSS
    if escape_html:
        text = html.escape(text)

    # Strip leading/trailing whitespace
    text = text.strip()

    # Remove null bytes and other control characters (except newlines and tabs)
    text = CONTROL_CHARACTERS.sub('', text)

    # Configurable length limiting to prevent DoS attacks
    if len(text) > max_length:
        text = text[:max_length]
        logger.warning(f"Text truncated to {max_length} characters for security")

    # Normalize unicode characters
    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    # Check if text is empty after sanitization
    if not text:
        raise ValueError("Text cannot be empty after sanitization")

    return text


def _bounded(value: Optional[str], max_length: int) -> str:
    """Control characters removed and cut to `max_length`, ready for JSON."""
    text = CONTROL_CHARACTERS.sub('', str(value or '')).strip()
    if len(text) > max_length:
        logger.warning(f"Summary field truncated to {max_length} characters")
        text = text[:max_length]
    return text


@dataclass
class PromptTemplate:
    """Secure prompt template with placeholders for safe data injection."""
    template: str
    placeholders: Dict[str, str]
    sanitization_config: Dict[str, Dict] = None  # Per-placeholder sanitization config

    def render(self, **kwargs) -> str:
        """
        Safely render the template with provided data.

        Args:
            **kwargs: Data to inject into placeholders

        Returns:
            str: Rendered prompt with sanitized data

        Raises:
            ValueError: If required placeholders are missing or data is invalid
        """
        # Validate all required placeholders are provided
        missing_placeholders = set(self.placeholders.keys()) - set(kwargs.keys())
        if missing_placeholders:
            raise ValueError(f"Missing required placeholders: {missing_placeholders}")

        # Sanitize all input data with configurable options
        sanitized_data = {}
        for key, value in kwargs.items():
            if key in self.placeholders:
                # Get sanitization config for this placeholder
                config = self.sanitization_config.get(key, {}) if self.sanitization_config else {}
                max_length = config.get('max_length', 1000)
                escape_html = config.get('escape_html', True)

                sanitized_data[key] = sanitize_text(str(value), max_length=max_length, escape_html=escape_html)
            else:
                # Skip unknown keys to prevent injection
                logger.warning(f"Unknown placeholder key: {key}")
                continue

        # Use safe string formatting with explicit placeholders
        try:
            return self.template.format(**sanitized_data)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e


class SecurePromptManager:
    """
    Renders the three oracle prompts: question generation, answer scoring and
    session feedback summarization.
    """

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        return {
            "question_generation": PromptTemplate(
                template="""Generate {count} {difficulty} level interview questions for the role below.

Job Title: {job_title}
Job Description: {job_description}
Candidate Skills: {skills}
Candidate Resume: {resume_text}

Requirements:
- Mix of technical and behavioral questions
- Questions should test both knowledge and problem-solving
- Return ONLY a JSON array with this structure, no other text:
[
  {{
    "questionText": "question here",
    "type": "technical|behavioral|situational",
    "skillTag": "relevant skill",
    "timeLimit": 180
  }}
]""",
                placeholders={
                    "count": "Number of questions to generate",
                    "difficulty": "beginner, intermediate or advanced",
                    "job_title": "Job title for context",
                    "job_description": "Job description for context",
                    "skills": "Comma separated skills",
                    "resume_text": "Candidate resume text, or N/A",
                },
                sanitization_config={
                    "job_description": {"max_length": 4000},
                    "resume_text": {"max_length": 6000},
                },
            ),
            "answer_scoring": PromptTemplate(
                template="""Evaluate this interview answer comprehensively.

Question: {question}
Skill being tested: {skill_tag}

Candidate's Answer: {answer}

Return ONLY valid JSON in this format:
{{
  "score": 85,
  "strengths": ["specific strength 1", "specific strength 2"],
  "weaknesses": ["area for improvement 1", "area for improvement 2"],
  "feedback": "detailed constructive feedback",
  "suggestions": ["specific suggestion 1", "specific suggestion 2"]
}}

Score must be an integer from 0 to 100 based on:
- Technical accuracy (if applicable)
- Clarity of communication
- Depth of understanding
- Practical experience demonstrated""",
                placeholders={
                    "question": "Interview question",
                    "skill_tag": "Skill the question targets",
                    "answer": "Candidate's answer",
                },
                sanitization_config={
                    "answer": {"max_length": ANSWER_MAX_LENGTH},
                },
            ),
            "feedback_summary": PromptTemplate(
                template="""Generate a comprehensive interview feedback report.

Job Title: {job_title}
Job Description: {job_description}

Answered questions (JSON, in interview order):
{answers}

Return ONLY valid JSON with this structure:
{{
  "overallScore": 75,
  "summary": "2-3 sentence overall assessment",
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "weaknesses": ["weakness 1", "weakness 2"],
  "ratedSkills": {{"skill1": 85, "skill2": 70}},
  "recommendations": ["recommendation 1", "recommendation 2", "recommendation 3"]
}}

overallScore and every ratedSkills value must be integers from 0 to 100.""",
                placeholders={
                    "job_title": "Job title for context",
                    "job_description": "Job description for context",
                    "answers": "JSON list of skillTag/questionText/answerText",
                },
                sanitization_config={
                    "job_description": {"max_length": 4000},
                    "answers": {"max_length": SUMMARY_ENTRY_MAX_LENGTH, "escape_html": False},
                },
            ),
        }

    def get_question_generation_prompt(
        self,
        job_title: str,
        job_description: str,
        skills: Sequence[str],
        difficulty: str,
        count: int,
        resume_text: Optional[str] = None,
    ) -> str:
        template = self._templates["question_generation"]
        return template.render(
            count=count,
            difficulty=difficulty,
            job_title=job_title,
            job_description=job_description or "N/A",
            skills=", ".join(skills) or "N/A",
            resume_text=resume_text or "N/A",
        )

    def get_answer_scoring_prompt(self, question_text: str, answer_text: str, skill_tag: str) -> str:
        """
        Get a scoring prompt with sanitized question and answer.

        Raises:
            ValueError: If the question or answer is empty after sanitization
        """
        template = self._templates["answer_scoring"]
        return template.render(
            question=question_text,
            skill_tag=skill_tag or "general",
            answer=answer_text,
        )

    def get_feedback_summary_prompt(self, answers: List[Dict[str, str]], job_title: str, job_description: str) -> str:
        """
        Get the session summary prompt for a batch of answered questions.

        Each entry is bounded field by field before serialization and the batch
        limit grows with the number of entries, so the JSON list always reaches
        the oracle whole.

        Raises:
            ValueError: If the batch is empty or a field is malformed
        """
        if not answers:
            raise ValueError("At least one answered question is required")

        entries = [
            {
                "skillTag": _bounded(answer.get("skillTag"), SKILL_TAG_MAX_LENGTH),
                "questionText": _bounded(answer.get("questionText"), QUESTION_MAX_LENGTH),
                "answerText": _bounded(answer.get("answerText"), ANSWER_MAX_LENGTH),
            }
            for answer in answers
        ]
        serialized = json.dumps(entries, ensure_ascii=False, indent=2)
        batch_limit = len(entries) * SUMMARY_ENTRY_MAX_LENGTH
        if len(serialized) > batch_limit:
            raise ValueError(f"Answer batch of {len(serialized)} characters exceeds {batch_limit}")

        base = self._templates["feedback_summary"]
        template = replace(
            base,
            sanitization_config={
                **base.sanitization_config,
                "answers": {"max_length": batch_limit, "escape_html": False},
            },
        )
        return template.render(
            job_title=job_title,
            job_description=job_description or "N/A",
            answers=serialized,
        )


secure_prompt_manager = SecurePromptManager()
