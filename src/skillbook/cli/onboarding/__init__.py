"""Interactive workspace initialisation."""

from skillbook.cli.onboarding.wizard import OnboardingWizard

__all__ = ["OnboardingWizard"]
