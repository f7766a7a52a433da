"""
Plant identification dependencies.
Resolve the shared Plant.id client and the history repository.
"""

from fastapi import Depends

from growsmart.shared.infrastructure.external_apis.api_client import (
    get_registered_client,
    register_api_client,
)

from ..domain.repositories.plant_identification_repository import PlantIdentificationRepository
from ..domain.services.identification_service import PlantIdentificationService
from ..infrastructure.database.plant_identification_repository_impl import (
    PlantIdentificationRepositoryImpl,
)
from ..infrastructure.external.plant_id_client import PLANT_ID_API_NAME, PlantIdClient


def get_plant_id_client() -> PlantIdClient:
    """Client registered at startup, or a new one registered on first use."""
    client = get_registered_client(PLANT_ID_API_NAME)
    if client is None:
        client = register_api_client(PlantIdClient())
    return client


def get_identification_repository() -> PlantIdentificationRepository:
    return PlantIdentificationRepositoryImpl()


def get_identification_service(
    client: PlantIdClient = Depends(get_plant_id_client),
    repository: PlantIdentificationRepository = Depends(get_identification_repository),
) -> PlantIdentificationService:
    return PlantIdentificationService(client, repository)
