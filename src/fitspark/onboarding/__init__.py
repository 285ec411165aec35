"""Terminal onboarding for new users."""

from .wizard import OnboardingWizard

__all__ = ["OnboardingWizard"]
