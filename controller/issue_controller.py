# controller/issue_controller.py
from fastapi import APIRouter, Depends
from controller.controller_dependencies import get_requirement_service, rate_limiter
from model.issue import MatchIssuesRequest, MatchIssuesResponse
from service.requirement_service import RequirementService
from util.constants import InternalURIs

issue_router = APIRouter(dependencies=[Depends(rate_limiter)])


@issue_router.post(InternalURIs.MATCH_ISSUES, response_model=MatchIssuesResponse)
async def match_issues(
    payload: MatchIssuesRequest,
    service: RequirementService = Depends(get_requirement_service),
) -> MatchIssuesResponse:
    return service.match_issues(payload)
