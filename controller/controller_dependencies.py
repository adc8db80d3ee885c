# controller/controller_dependencies.py
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from service.requirement_service import RequirementService

rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


def get_requirement_service() -> RequirementService:
    return RequirementService()
