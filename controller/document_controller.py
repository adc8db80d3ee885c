# controller/document_controller.py
from fastapi import APIRouter, Depends, status
from controller.controller_dependencies import get_requirement_service, rate_limiter
from model.candidate import (
    GroupDuplicatesRequest,
    GroupDuplicatesResponse,
    NormalizeCandidatesRequest,
    NormalizeCandidatesResponse,
)
from service.requirement_service import RequirementService
from util.constants import InternalURIs

document_router = APIRouter(dependencies=[Depends(rate_limiter)])


@document_router.post(
    InternalURIs.DOCUMENT_CANDIDATES,
    response_model=NormalizeCandidatesResponse,
    status_code=status.HTTP_200_OK,
)
async def normalize_document_candidates(
    document_id: str,
    payload: NormalizeCandidatesRequest,
    service: RequirementService = Depends(get_requirement_service),
) -> NormalizeCandidatesResponse:
    return service.normalize(document_id, payload)


@document_router.post(
    InternalURIs.DOCUMENT_DUPLICATES,
    response_model=GroupDuplicatesResponse,
    status_code=status.HTTP_200_OK,
)
async def group_document_duplicates(
    document_id: str,
    payload: GroupDuplicatesRequest,
    service: RequirementService = Depends(get_requirement_service),
) -> GroupDuplicatesResponse:
    return service.duplicates(document_id, payload)
