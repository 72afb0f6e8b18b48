"""
API router aggregation for the quiz grader.
Monitoring endpoints are plain FastAPI routes; question traffic goes through the path-pattern Router.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from quizgrader.core.observability import get_observability_service
from quizgrader.core.routing import RouteMatch

from .questions import QuestionHandlers, build_question_router

router = APIRouter()


@router.get(
    "/healthz",
    tags=["Monitoring"],
    summary="Health Check",
    description="Fast health check endpoint for load balancers and container orchestration",
)
async def health_check(request: Request):
    """Returns basic application health status without checking the question store."""
    observability = get_observability_service()
    return await observability.health_check(request.app.state.settings.app_version)


@router.get(
    "/readyz",
    tags=["Monitoring"],
    summary="Readiness Check",
    description="Readiness check including the question store",
)
async def readiness_check(request: Request):
    """
    Comprehensive readiness check.

    Use this endpoint to determine if the application is ready to serve traffic.
    """
    observability = get_observability_service()
    readiness = await observability.readiness_check(
        version=request.app.state.settings.app_version,
        repository=request.app.state.question_repository,
    )
    status_code = 200 if readiness.ready else 503
    return JSONResponse(status_code=status_code, content=readiness.model_dump(mode="json"))


@router.get(
    "/metrics",
    tags=["Monitoring"],
    summary="Prometheus Metrics",
    description="Application metrics in Prometheus format",
)
async def metrics(request: Request):
    if not request.app.state.settings.enable_metrics:
        return JSONResponse(status_code=404, content={"error": "Metrics disabled"})
    observability = get_observability_service()
    return await observability.get_metrics()


# Registered last: everything not matched above is resolved by the question router
dispatch_router = APIRouter()

DISPATCH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@dispatch_router.api_route("/{full_path:path}", methods=DISPATCH_METHODS, include_in_schema=False)
async def dispatch_question_routes(request: Request, full_path: str):
    def remember_route(found: RouteMatch) -> None:
        request.state.route_pattern = found.route.pattern
        request.state.question_id = found.params.get("id")

    response = await request.app.state.question_router.dispatch(
        request.method, request.url.path, request, on_match=remember_route
    )
    if response is None:
        return JSONResponse(
            status_code=404, content={"error": "Endpoint not found", "path": request.url.path}
        )
    return response


__all__ = ["router", "dispatch_router", "QuestionHandlers", "build_question_router"]
