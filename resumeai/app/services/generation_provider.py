"""
Generation providers: analysis, enhancement and job matching of resume text.

Two implementations behind one interface. OpenAIGenerationProvider calls the
LLM and raises ProviderError on any failure; FallbackGenerationProvider returns
schema-valid synthetic data and never fails. build_generation_provider picks one
at startup from the configured credential.
"""
from __future__ import annotations

import json
import random
import re
from abc import ABC, abstractmethod

from openai import OpenAI, OpenAIError
from pydantic import ValidationError as PydanticValidationError

from resumeai.app.core.config import PROMPT_MAX_JD_CHARS, PROMPT_MAX_RESUME_CHARS, Settings
from resumeai.app.core.errors import ProviderError
from resumeai.app.core.logging_config import get_logger
from resumeai.app.schemas.resume import AnalysisResult, JobMatchResult

logger = get_logger("services.generation_provider")

ANALYZE_PROMPT = """Analyze the following resume and provide a comprehensive analysis.

Resume Text:
{resume_text}

Respond with ONLY a valid JSON object with this exact structure:
{{
    "score": 85,
    "strengths": ["Professional experience", "Technical skills"],
    "weaknesses": ["Could use more metrics", "Missing keywords"],
    "keywords": ["JavaScript", "React", "Node.js"],
    "atsCompatibility": 78,
    "suggestions": ["Add quantified achievements", "Include industry keywords"]
}}
score and atsCompatibility are integers from 0 to 100.
"""

ENHANCE_PROMPT = """Enhance the following resume for the role "{target_role}" in the "{target_industry}" industry.
Keep every fact from the original. Do not invent experience, employers, dates or skills.
Return only the enhanced resume text, no additional commentary:

{resume_text}
"""

MATCH_PROMPT = """Compare the resume with the job description.

Resume: {resume_text}
Job: {job_title} at {company_name}
Description: {job_description}

Respond with ONLY a valid JSON object with this exact structure:
{{
    "matchScore": 75,
    "matchedKeywords": ["skill1", "skill2"],
    "missingKeywords": ["missing1", "missing2"],
    "suggestions": ["suggestion1", "suggestion2"],
    "strengthAreas": ["strength1", "strength2"],
    "improvementAreas": ["area1", "area2"],
    "salaryNegotiationPoints": ["point1", "point2"]
}}
matchScore is an integer from 0 to 100.
"""

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class GenerationProvider(ABC):
    """Contract for analysis / enhancement / job-match generation."""

    name: str = "base"

    @abstractmethod
    def analyze(self, resume_text: str) -> AnalysisResult:
        ...

    @abstractmethod
    def enhance(self, resume_text: str, target_role: str, target_industry: str) -> str:
        ...

    @abstractmethod
    def match(
        self,
        resume_text: str,
        job_title: str,
        job_description: str,
        company_name: str = "",
    ) -> JobMatchResult:
        ...


class FallbackGenerationProvider(GenerationProvider):
    """Synthetic but schema-valid results. Used when the live provider is unconfigured or fails."""

    name = "fallback"

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def analyze(self, resume_text: str) -> AnalysisResult:
        return AnalysisResult(
            score=self._rng.randint(75, 94),
            strengths=["Strong technical background", "Relevant experience", "Good education"],
            weaknesses=["Needs more metrics", "Missing keywords", "Could improve formatting"],
            keywords=["JavaScript", "React", "Node.js", "MongoDB", "Express"],
            atsCompatibility=self._rng.randint(80, 94),
            suggestions=[
                "Add quantified achievements",
                "Include industry-specific keywords",
                "Improve ATS formatting",
                "Use stronger action verbs",
            ],
        )

    def enhance(self, resume_text: str, target_role: str, target_industry: str) -> str:
        return (
            f"[ENHANCED FOR {target_role} IN {target_industry}]\n\n{resume_text}\n\n"
            f"[This resume has been optimized with relevant keywords and improved formatting "
            f"for the {target_role} position in the {target_industry} industry.]"
        )

    def match(
        self,
        resume_text: str,
        job_title: str,
        job_description: str,
        company_name: str = "",
    ) -> JobMatchResult:
        return JobMatchResult(
            matchScore=self._rng.randint(65, 94),
            matchedKeywords=["JavaScript", "React", "Problem solving", "Team work"],
            missingKeywords=["Python", "AWS", "Docker", "Kubernetes"],
            suggestions=[
                "Add cloud computing experience",
                "Highlight leadership skills",
                "Include specific project metrics",
                "Mention agile methodologies",
            ],
            strengthAreas=["Technical skills", "Experience level", "Education background"],
            improvementAreas=["Cloud technologies", "Leadership experience", "Certifications"],
            salaryNegotiationPoints=[
                "Strong technical foundation",
                "Relevant project experience",
                "Industry knowledge",
            ],
        )


def parse_json_payload(content: str) -> dict:
    """Parse an LLM JSON reply, tolerating ```json fences. Raises ProviderError."""
    cleaned = _FENCE_RE.sub("", (content or "").strip()).strip()
    if not cleaned:
        raise ProviderError("Empty response from provider")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ProviderError(f"Provider returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProviderError("Provider returned JSON that is not an object")
    return data


class OpenAIGenerationProvider(GenerationProvider):
    """Live provider backed by OpenAI chat completions."""

    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 30, client: OpenAI | None = None):
        self.model = model
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def _complete(self, prompt: str, json_mode: bool, temperature: float) -> str:
        kwargs = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            resp = self._client.chat.completions.create(**kwargs)
            return (resp.choices[0].message.content or "").strip()
        except OpenAIError as e:
            raise ProviderError(f"OpenAI request failed: {e}") from e
        except (IndexError, AttributeError) as e:
            raise ProviderError(f"Unexpected OpenAI response shape: {e}") from e

    def analyze(self, resume_text: str) -> AnalysisResult:
        prompt = ANALYZE_PROMPT.format(resume_text=resume_text[:PROMPT_MAX_RESUME_CHARS])
        data = parse_json_payload(self._complete(prompt, json_mode=True, temperature=0.2))
        try:
            return AnalysisResult.model_validate(data)
        except PydanticValidationError as e:
            raise ProviderError(f"Analysis response failed validation: {e.error_count()} errors") from e

    def enhance(self, resume_text: str, target_role: str, target_industry: str) -> str:
        prompt = ENHANCE_PROMPT.format(
            resume_text=resume_text[:PROMPT_MAX_RESUME_CHARS],
            target_role=target_role,
            target_industry=target_industry,
        )
        content = self._complete(prompt, json_mode=False, temperature=0.5)
        if not content:
            raise ProviderError("Empty enhancement from provider")
        return content

    def match(
        self,
        resume_text: str,
        job_title: str,
        job_description: str,
        company_name: str = "",
    ) -> JobMatchResult:
        prompt = MATCH_PROMPT.format(
            resume_text=resume_text[:PROMPT_MAX_RESUME_CHARS],
            job_title=job_title,
            company_name=company_name or "an unspecified company",
            job_description=job_description[:PROMPT_MAX_JD_CHARS],
        )
        data = parse_json_payload(self._complete(prompt, json_mode=True, temperature=0.2))
        try:
            return JobMatchResult.model_validate(data)
        except PydanticValidationError as e:
            raise ProviderError(f"Match response failed validation: {e.error_count()} errors") from e


def build_generation_provider(settings: Settings) -> GenerationProvider:
    """Select the provider once at process start."""
    if not settings.openai_api_key:
        logger.warning("openai_api_key not set; using fallback generation responses")
        return FallbackGenerationProvider()
    logger.info("OpenAI generation provider initialized model=%s", settings.openai_model)
    return OpenAIGenerationProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout=settings.http_request_timeout,
    )
