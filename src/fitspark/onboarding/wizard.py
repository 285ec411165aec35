"""Interactive onboarding questionnaire for new accounts."""

import questionary
from questionary import Style

from ..models.user import FitnessGoals, FitnessLevel, PrimaryGoal, Theme, User

custom_style = Style(
    [
        ("qmark", "fg:#ff6b35 bold"),
        ("question", "bold"),
        ("answer", "fg:#2a9d8f bold"),
        ("pointer", "fg:#ff6b35 bold"),
        ("highlighted", "fg:#ff6b35 bold"),
        ("selected", "fg:#2a9d8f"),
        ("separator", "fg:#2a9d8f"),
        ("instruction", ""),
        ("text", ""),
    ]
)

HEALTH_CONCERNS = [
    "Joint pain or arthritis",
    "Back problems",
    "Heart conditions",
    "Diabetes",
    "High blood pressure",
    "Balance issues",
    "Recent injury recovery",
]

ACTIVITIES = [
    "Chair Yoga",
    "Walking",
    "Light Weights",
    "Elliptical/Cardio",
    "Stretching",
    "Balance Exercises",
    "Resistance Bands",
    "Swimming",
]


def _optional_number(value: str | None, cast=float):
    try:
        return cast(value) if value else None
    except ValueError:
        return None


def _positive_number(text: str) -> bool | str:
    if not text:
        return True
    try:
        return float(text) > 0 or "Enter a positive number"
    except ValueError:
        return "Enter a number"


class OnboardingWizard:
    """Collects account details and fitness goals from the terminal."""

    async def collect(self) -> tuple[User, str]:
        """Run the questionnaire and return the new user and their password."""
        print("\n=== Welcome to FitSpark ===\n")

        name = await questionary.text(
            "What's your name?",
            validate=lambda t: bool(t.strip()) or "Name is required",
            style=custom_style,
        ).ask_async()

        username = await questionary.text(
            "Choose a username:",
            validate=lambda t: 3 <= len(t) <= 50 or "Use 3-50 characters",
            style=custom_style,
        ).ask_async()

        email = await questionary.text(
            "Email address:",
            validate=lambda t: "@" in t or "Enter a valid email",
            style=custom_style,
        ).ask_async()

        password = await questionary.password(
            "Password:",
            validate=lambda t: len(t) >= 6 or "Use at least 6 characters",
            style=custom_style,
        ).ask_async()

        goals = await self._collect_goals()

        start_weight = None
        target_weight = None
        age = None

        collect_optional = await questionary.confirm(
            "Would you like to track your weight? (optional)",
            default=True,
            style=custom_style,
        ).ask_async()

        if collect_optional:
            start_weight = _optional_number(
                await questionary.text(
                    "Current weight (lbs):", validate=_positive_number, style=custom_style
                ).ask_async()
            )
            target_weight = _optional_number(
                await questionary.text(
                    "Target weight (lbs):", validate=_positive_number, style=custom_style
                ).ask_async()
            )
            age = _optional_number(
                await questionary.text("Your age:", style=custom_style).ask_async(), cast=int
            )

        user = User(
            username=username,
            email=email,
            name=name.strip(),
            age=age,
            start_weight=start_weight,
            current_weight=start_weight,
            target_weight=target_weight,
            theme=goals.motivation_style,
            fitness_goals=goals,
        )
        return user, password

    async def _collect_goals(self) -> FitnessGoals:
        primary_goal = await questionary.select(
            "What's your primary goal?",
            choices=[
                questionary.Choice("Lose weight", PrimaryGoal.WEIGHT_LOSS),
                questionary.Choice("Build strength", PrimaryGoal.STRENGTH),
                questionary.Choice("Improve endurance", PrimaryGoal.ENDURANCE),
                questionary.Choice("Increase flexibility", PrimaryGoal.FLEXIBILITY),
                questionary.Choice("Overall health", PrimaryGoal.OVERALL_HEALTH),
            ],
            style=custom_style,
        ).ask_async()

        time_commitment = await questionary.select(
            "How much time can you give each day?",
            choices=[
                questionary.Choice("15 minutes", 15),
                questionary.Choice("30 minutes", 30),
                questionary.Choice("45 minutes", 45),
                questionary.Choice("60 minutes", 60),
            ],
            style=custom_style,
        ).ask_async()

        fitness_level = await questionary.select(
            "How would you describe your fitness level?",
            choices=[
                questionary.Choice("Beginner (just starting out)", FitnessLevel.BEGINNER),
                questionary.Choice("Intermediate (exercise a few times a week)", FitnessLevel.INTERMEDIATE),
                questionary.Choice("Advanced (consistent routine)", FitnessLevel.ADVANCED),
            ],
            style=custom_style,
        ).ask_async()

        health_concerns = await questionary.checkbox(
            "Any health considerations we should plan around?",
            choices=HEALTH_CONCERNS,
            style=custom_style,
        ).ask_async()

        motivation_style = await questionary.select(
            "Pick a coaching style:",
            choices=[
                questionary.Choice("Fun & Encouraging", Theme.FUN),
                questionary.Choice("Direct & Challenging", Theme.AGGRESSIVE),
                questionary.Choice("Drill Sergeant", Theme.DRILL),
            ],
            style=custom_style,
        ).ask_async()

        activities = await questionary.checkbox(
            "Which activities do you enjoy? (Select all that apply)",
            choices=ACTIVITIES,
            style=custom_style,
        ).ask_async()

        return FitnessGoals(
            primary_goal=primary_goal or PrimaryGoal.OVERALL_HEALTH,
            time_commitment=time_commitment or 30,
            fitness_level=fitness_level or FitnessLevel.BEGINNER,
            health_concerns=health_concerns or [],
            motivation_style=motivation_style or Theme.FUN,
            preferred_activities=activities or [],
        )
