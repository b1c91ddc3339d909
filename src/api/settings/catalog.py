"""Test catalog API — test types, sample types, standards and mixer types."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.settings.deps import (
    can_create,
    can_delete,
    can_read,
    can_update,
    get_settings_service,
)
from src.models.enums import StandardType
from src.schemas import catalog as schemas
from src.schemas.base import DeleteResponse
from src.settings.service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings: catalog"])


# Test types

@router.post(
    "/test-types",
    response_model=schemas.TestTypeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_test_type(
    data: schemas.TestTypeCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_test_type(data)


@router.get(
    "/test-types",
    response_model=List[schemas.TestTypeResponse],
    dependencies=[can_read],
)
async def list_test_types(
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    """List test types with their samples and standards.

    Inactive samples and standards are hidden unless ``includeInactive`` is set.
    """
    return await service.list_test_types(include_inactive)


@router.get(
    "/test-types/{test_type_id}",
    response_model=schemas.TestTypeResponse,
    dependencies=[can_read],
)
async def get_test_type(
    test_type_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_test_type(test_type_id)


@router.patch(
    "/test-types/{test_type_id}",
    response_model=schemas.TestTypeResponse,
    dependencies=[can_update],
)
async def update_test_type(
    test_type_id: uuid.UUID,
    data: schemas.TestTypeUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_test_type(test_type_id, data)


@router.delete(
    "/test-types/{test_type_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_test_type(
    test_type_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    """Delete a test type together with its sample types."""
    return await service.delete_test_type(test_type_id)


# Sample types

@router.post(
    "/sample-types",
    response_model=schemas.SampleTypeDetail,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_sample_type(
    data: schemas.SampleTypeCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_sample_type(data)


@router.get(
    "/sample-types",
    response_model=List[schemas.SampleTypeDetail],
    dependencies=[can_read],
)
async def list_sample_types(
    test_type_id: Optional[uuid.UUID] = Query(None, alias="testTypeId"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_sample_types(test_type_id, include_inactive)


@router.get(
    "/sample-types/{sample_type_id}",
    response_model=schemas.SampleTypeDetail,
    dependencies=[can_read],
)
async def get_sample_type(
    sample_type_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_sample_type(sample_type_id)


@router.patch(
    "/sample-types/{sample_type_id}",
    response_model=schemas.SampleTypeDetail,
    dependencies=[can_update],
)
async def update_sample_type(
    sample_type_id: uuid.UUID,
    data: schemas.SampleTypeUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_sample_type(sample_type_id, data)


@router.delete(
    "/sample-types/{sample_type_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_sample_type(
    sample_type_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_sample_type(sample_type_id)


# Standards

@router.post(
    "/standards",
    response_model=schemas.StandardDetail,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_standard(
    data: schemas.StandardCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_standard(data)


@router.get(
    "/standards",
    response_model=List[schemas.StandardDetail],
    dependencies=[can_read],
)
async def list_standards(
    standard_type: Optional[StandardType] = Query(None, alias="type"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_standards(standard_type, include_inactive)


@router.get(
    "/standards/{standard_id}",
    response_model=schemas.StandardDetail,
    dependencies=[can_read],
)
async def get_standard(
    standard_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_standard(standard_id)


@router.patch(
    "/standards/{standard_id}",
    response_model=schemas.StandardDetail,
    dependencies=[can_update],
)
async def update_standard(
    standard_id: uuid.UUID,
    data: schemas.StandardUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    """Update a standard. ``testTypeIds`` replaces the linked test types."""
    return await service.update_standard(standard_id, data)


@router.delete(
    "/standards/{standard_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_standard(
    standard_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_standard(standard_id)


# Mixer types

@router.post(
    "/mixer-types",
    response_model=schemas.MixerTypeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_mixer_type(
    data: schemas.MixerTypeCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_mixer_type(data)


@router.get(
    "/mixer-types",
    response_model=List[schemas.MixerTypeResponse],
    dependencies=[can_read],
)
async def list_mixer_types(
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_mixer_types(include_inactive)


@router.get(
    "/mixer-types/{mixer_type_id}",
    response_model=schemas.MixerTypeResponse,
    dependencies=[can_read],
)
async def get_mixer_type(
    mixer_type_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_mixer_type(mixer_type_id)


@router.patch(
    "/mixer-types/{mixer_type_id}",
    response_model=schemas.MixerTypeResponse,
    dependencies=[can_update],
)
async def update_mixer_type(
    mixer_type_id: uuid.UUID,
    data: schemas.MixerTypeUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_mixer_type(mixer_type_id, data)


@router.delete(
    "/mixer-types/{mixer_type_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_mixer_type(
    mixer_type_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_mixer_type(mixer_type_id)
