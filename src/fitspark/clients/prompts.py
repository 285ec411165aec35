"""Prompt templates for the coaching model."""

from ..models.user import FitnessGoals, Theme
from ..models.video import Video

PROGRAM_SYSTEM_PROMPT = (
    "You are a certified fitness trainer specializing in programs for people over 55. "
    "Create safe, progressive, and engaging workout plans. Always respond with valid JSON."
)

MOTIVATION_SYSTEM_PROMPT = (
    "You are a motivational fitness coach specializing in encouraging people over 55. "
    "Create inspiring, theme-appropriate messages."
)

BADGE_SYSTEM_PROMPT = (
    "You are an expert at creating motivational achievement badges for fitness apps. "
    "Keep responses concise and impactful."
)

THEME_PERSONALITIES = {
    Theme.FUN: "encouraging, playful, and positive with emoji and excitement",
    Theme.AGGRESSIVE: "intense, challenging, and motivating with strong language",
    Theme.DRILL: "disciplined, structured, and military-style with clear commands",
}

THEME_MOTIVATION_STYLES = {
    Theme.FUN: "upbeat, encouraging, and playful with emojis",
    Theme.AGGRESSIVE: "intense, powerful, and challenging",
    Theme.DRILL: "disciplined, structured, and military-inspired",
}

THEME_BADGE_STYLES = {
    Theme.FUN: "fun and celebratory",
    Theme.AGGRESSIVE: "powerful and intense",
    Theme.DRILL: "disciplined and structured",
}


def format_goals(goals: FitnessGoals) -> str:
    """Format onboarding answers for inclusion in the program prompt."""
    concerns = ", ".join(goals.health_concerns) or "None specified"
    activities = ", ".join(goals.preferred_activities) or "All activities welcome"
    return "\n".join([
        "Fitness Goals & Preferences:",
        f"- Primary Goal: {goals.primary_goal.value}",
        f"- Daily Time Commitment: {goals.time_commitment} minutes",
        f"- Fitness Level: {goals.fitness_level.value}",
        f"- Health Concerns: {concerns}",
        f"- Preferred Activities: {activities}",
    ])


def format_videos(videos: list[Video]) -> str:
    """List available videos grouped by exercise type."""
    by_type: dict[str, list[Video]] = {}
    for video in videos:
        by_type.setdefault(video.exercise_type.value, []).append(video)

    if not by_type:
        return "No videos available; describe every exercise in the instructions."

    lines = []
    for exercise_type, group in by_type.items():
        entries = ", ".join(
            f'"{v.title}" ({v.duration}min, effort: {v.effort_level}/5, id: {v.id})'
            for v in group
        )
        lines.append(f"{exercise_type}: {entries}")
    return "\n".join(lines)


def build_program_prompt(
    name: str,
    age: int | None,
    start_weight: float | None,
    target_weight: float | None,
    theme: Theme,
    goals: FitnessGoals,
    videos: list[Video],
    days: int = 30,
) -> str:
    """Build the prompt for a personalised multi-day program."""
    age_text = f"a {age}-year-old person" if age else "a person"
    weight_text = ""
    if start_weight and target_weight:
        weight_text = f" from {start_weight:g} lbs to {target_weight:g} lbs"

    safety = ""
    if goals.health_concerns:
        safety = (
            "\nIMPORTANT: Accommodate these health considerations: "
            f"{', '.join(goals.health_concerns)}. Modify exercises accordingly for safety."
        )

    priority = ""
    if goals.preferred_activities:
        priority = f" (prioritize: {', '.join(goals.preferred_activities)})"

    return f"""
Create a personalized {days}-day fitness program for {name}, {age_text} looking to {goals.primary_goal.phrase}{weight_text}.

Theme: {theme.value} - Use a {THEME_PERSONALITIES[theme]} tone throughout.
{format_goals(goals)}
Focus areas: Chair yoga, light weights, walking, and flexibility for people over 55.{safety}

Available videos by type:
{format_videos(videos)}

Create a progressive {days}-day program that:
1. Starts gentle and builds intensity gradually based on fitness level: {goals.fitness_level.value}
2. Alternates between different exercise types{priority}
3. Includes rest days and active recovery
4. Provides specific motivation messages for each day in the {theme.value} theme style
5. Uses the available videos when appropriate
6. Each workout should target {goals.time_commitment} minutes total (adjustable based on user capacity)
7. Include specific exercise instructions for movements without videos
8. Ensure exercises are safe and appropriate for any health concerns mentioned

Return a JSON object {{"workouts": [...]}} holding {days} daily workout plans with this structure:
{{
  "day": number,
  "title": "string",
  "description": "string",
  "totalMinutes": number,
  "exercises": [
    {{
      "name": "string",
      "duration": number,
      "videoId": "string (if using available video)",
      "instructions": "detailed instructions"
    }}
  ],
  "motivationMessage": "theme-appropriate daily message"
}}
"""


def build_motivation_prompt(theme: Theme, day: int, user_name: str, days: int = 30) -> str:
    return f"""
Generate a motivational message for {user_name} on day {day} of their {days}-day fitness journey.
Theme: {theme.value} - Use a {THEME_MOTIVATION_STYLES[theme]} style.

The message should:
1. Be 1-2 sentences long
2. Reference the day number if relevant
3. Be encouraging and theme-appropriate
4. Focus on progress and consistency

Respond with just the motivational message, no extra formatting.
"""


def build_badge_prompt(badge_type: str, theme: Theme, user_name: str) -> str:
    return f"""
Create an achievement badge for {user_name} who just earned: {badge_type}
Theme: {theme.value}

Generate a badge with:
1. Title: Short, impactful name (2-4 words)
2. Description: One sentence explanation of what was achieved
3. Icon: Font Awesome icon class (just the icon name like "trophy" or "fire")

Make it {THEME_BADGE_STYLES[theme]}.

Return JSON in this format:
{{
  "title": "string",
  "description": "string",
  "icon": "string"
}}
"""
