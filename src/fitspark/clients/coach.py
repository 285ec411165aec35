"""Coaching model client (OpenAI chat completions)."""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings, get_settings
from ..errors import CoachError, ProgramGenerationError
from ..models.achievement import FALLBACK_BADGE, BadgeContent
from ..models.user import FitnessGoals, Theme, User
from ..models.video import Video
from ..models.workout import DailyWorkoutPlan
from .prompts import (
    BADGE_SYSTEM_PROMPT,
    MOTIVATION_SYSTEM_PROMPT,
    PROGRAM_SYSTEM_PROMPT,
    build_badge_prompt,
    build_motivation_prompt,
    build_program_prompt,
)

logger = logging.getLogger(__name__)

FALLBACK_MOTIVATION = "You're doing great! Stay consistent and trust the process."
EMPTY_MOTIVATION = "Keep going! Every day makes you stronger."


@dataclass
class ProgramRequest:
    """Inputs for a personalised program."""

    name: str
    theme: Theme
    goals: FitnessGoals
    age: int | None = None
    start_weight: float | None = None
    target_weight: float | None = None
    videos: list[Video] = field(default_factory=list)
    days: int = 30

    @classmethod
    def for_user(cls, user: User, videos: list[Video], days: int = 30) -> "ProgramRequest":
        return cls(
            name=user.name,
            theme=user.theme,
            goals=user.fitness_goals or FitnessGoals(motivation_style=user.theme),
            age=user.age,
            start_weight=user.start_weight,
            target_weight=user.target_weight,
            videos=videos,
            days=days,
        )


@runtime_checkable
class Coach(Protocol):
    """What the services need from a coaching backend."""

    async def generate_program(self, request: ProgramRequest) -> list[DailyWorkoutPlan]:
        ...

    async def generate_motivation(self, theme: Theme, day: int, user_name: str) -> str:
        ...

    async def generate_badge(self, badge_type: str, theme: Theme, user_name: str) -> BadgeContent:
        ...


class CoachClient:
    """OpenAI-backed coach."""

    def __init__(self, settings: Settings | None = None, client: AsyncOpenAI | None = None):
        self.settings = settings or get_settings()
        self.model = self.settings.openai_model
        self._client = client or AsyncOpenAI(
            api_key=self.settings.openai_api_key or os.environ.get("OPENAI_API_KEY", ""),
            base_url=self.settings.openai_base_url,
        )

    async def _complete(
        self,
        system: str,
        prompt: str,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
            **kwargs,
        )
        try:
            return response.choices[0].message.content or ""
        except (IndexError, AttributeError, TypeError) as e:
            raise CoachError(f"Malformed completion response: {e}") from e

    async def generate_program(self, request: ProgramRequest) -> list[DailyWorkoutPlan]:
        """Generate a personalised program.

        Raises:
            ProgramGenerationError: The model call failed or returned no
                usable plans.
        """
        prompt = build_program_prompt(
            name=request.name,
            age=request.age,
            start_weight=request.start_weight,
            target_weight=request.target_weight,
            theme=request.theme,
            goals=request.goals,
            videos=request.videos,
            days=request.days,
        )
        try:
            content = await self._complete(
                PROGRAM_SYSTEM_PROMPT,
                prompt,
                max_tokens=self.settings.program_max_tokens,
                json_mode=True,
            )
            plans = parse_program(content, theme=request.theme)
        except (CoachError, OpenAIError, ValueError, KeyError, TypeError) as e:
            logger.error("Program generation failed for %s: %s", request.name, e)
            raise ProgramGenerationError("Failed to generate personalized program") from e

        if not plans:
            raise ProgramGenerationError("Model returned an empty program")
        return plans

    async def generate_motivation(self, theme: Theme, day: int, user_name: str) -> str:
        """Short motivational message; falls back to a stock line on failure."""
        prompt = build_motivation_prompt(theme, day, user_name, days=self.settings.program_days)
        try:
            content = await self._complete(MOTIVATION_SYSTEM_PROMPT, prompt, max_tokens=100)
        except (CoachError, OpenAIError) as e:
            logger.warning("Motivation generation failed: %s", e)
            return FALLBACK_MOTIVATION
        return content.strip() or EMPTY_MOTIVATION

    async def generate_badge(self, badge_type: str, theme: Theme, user_name: str) -> BadgeContent:
        """Display text for a newly earned badge.

        Missing or non-text fields are filled from the fallback badge.

        Raises:
            CoachError: The model call failed or returned invalid JSON.
        """
        prompt = build_badge_prompt(badge_type, theme, user_name)
        try:
            content = await self._complete(BADGE_SYSTEM_PROMPT, prompt, max_tokens=200, json_mode=True)
            data = json.loads(content or "{}")
        except (OpenAIError, json.JSONDecodeError) as e:
            raise CoachError(f"Badge generation failed: {e}") from e

        if not isinstance(data, dict):
            raise CoachError("Badge response was not a JSON object")

        return BadgeContent(
            title=_text_field(data, "title", FALLBACK_BADGE.title),
            description=_text_field(data, "description", FALLBACK_BADGE.description),
            icon=_text_field(data, "icon", FALLBACK_BADGE.icon),
        )


def _text_field(data: dict, key: str, default: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def parse_program(content: str, theme: Theme) -> list[DailyWorkoutPlan]:
    """Parse the model's JSON into daily plans.

    The plan list may sit under ``workouts``, ``days`` or ``program``, or be
    the top-level value itself.
    """
    data = json.loads(content or "{}")
    if isinstance(data, dict):
        items = data.get("workouts") or data.get("days") or data.get("program") or []
    else:
        items = data

    plans = []
    for item in items:
        plan = DailyWorkoutPlan.from_dict(item)
        plan.theme = theme.value
        plans.append(plan)
    return sorted(plans, key=lambda p: p.day)
