"""
Onboarding dependencies.
"""

from fastapi import Depends

from ..domain.repositories.profile_repository import ProfileRepository
from ..domain.services.onboarding_service import OnboardingService
from ..infrastructure.database.profile_repository_impl import ProfileRepositoryImpl


def get_profile_repository() -> ProfileRepository:
    return ProfileRepositoryImpl()


def get_onboarding_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> OnboardingService:
    return OnboardingService(profiles)
