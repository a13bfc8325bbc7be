"""
API routes for the schema walker.

Provides endpoints for the graph overview, the walk itself, the candidate
selection and the walk read operations.

Query failures are not HTTP errors: each response carries the runner's
status with the executor's message in ``status.error`` and the exact
Cypher in ``status.query_used``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from schema_walker import __version__
from schema_walker.api.dependencies import ServiceContainer
from schema_walker.api.models import (
    AdjacencyResponse,
    CountsResponse,
    ErrorResponse,
    HealthResponse,
    PickRelationshipRequest,
    PropertyFilterRequest,
    QueriesUsedResponse,
    QueryStatus,
    SelectLabelRequest,
    ServerInfoResponse,
    WalkResponse,
)
from schema_walker.explorer.session import CandidateNotReadyError
from schema_walker.graph.health import check_neo4j_health_detailed

logger = logging.getLogger(__name__)

router = APIRouter()


def get_services() -> ServiceContainer:
    """Get service container - injected at runtime."""
    # This is overridden by dependency injection in create_app
    msg = "Services not configured"
    raise RuntimeError(msg)


def _walk_response(services: ServiceContainer) -> WalkResponse:
    return WalkResponse(
        walk=services.manager.walk,
        status=services.manager.status,
        candidate=services.explorer.candidate,
        warning=services.manager.last_warning,
    )


# ==============================================================================
# Health and overview
# ==============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check endpoint",
)
async def health_check(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> HealthResponse:
    """Report Neo4j connectivity and the size of the current walk."""
    neo4j = await check_neo4j_health_detailed(services.client)
    return HealthResponse(
        status="healthy" if neo4j["status"] == "healthy" else "degraded",
        neo4j=neo4j,
        walk_steps=len(services.manager.walk.steps),
        version=__version__,
    )


@router.get(
    "/v1/overview/labels",
    response_model=CountsResponse,
    tags=["overview"],
    summary="Count nodes per label across the whole graph",
)
async def overview_labels(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> CountsResponse:
    await services.overview.labels.refresh()
    return CountsResponse.of(services.overview.labels)


@router.get(
    "/v1/overview/relationship-types",
    response_model=CountsResponse,
    tags=["overview"],
    summary="Count relationships per type across the whole graph",
)
async def overview_relationship_types(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> CountsResponse:
    await services.overview.relationship_types.refresh()
    return CountsResponse.of(services.overview.relationship_types)


@router.get(
    "/v1/overview/server",
    response_model=ServerInfoResponse,
    tags=["overview"],
    summary="Server agent string",
)
async def overview_server(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> ServerInfoResponse:
    return ServerInfoResponse(agent=await services.overview.server_agent())


# ==============================================================================
# Walk
# ==============================================================================


@router.get("/v1/walk", response_model=WalkResponse, tags=["walk"], summary="Current walk")
async def get_walk(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    return _walk_response(services)


@router.delete("/v1/walk", response_model=WalkResponse, tags=["walk"], summary="Clear the walk")
async def clear_walk(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    await services.explorer.reset()
    return _walk_response(services)


@router.post(
    "/v1/walk/steps",
    response_model=WalkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "No label selected"}},
    tags=["walk"],
    summary="Commit the candidate and a relationship as the next step",
)
async def add_step(
    request: PickRelationshipRequest,
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    """
    Append a step built from the current candidate selection.

    Args:
        request: Picked relationship type/filters and its direction
        services: Injected service container

    Returns:
        WalkResponse with the extended walk and a fresh candidate
    """
    try:
        await services.explorer.pick_relationship(request.relationship, inbound=request.inbound)
    except CandidateNotReadyError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "candidate_not_ready", "message": str(e)},
        ) from e
    return _walk_response(services)


@router.delete(
    "/v1/walk/steps/{index}",
    response_model=WalkResponse,
    tags=["walk"],
    summary="Delete a step and every step after it",
)
async def delete_step(
    index: int = Path(ge=0),
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    await services.explorer.delete_step(index)
    return _walk_response(services)


# ==============================================================================
# Candidate selection
# ==============================================================================


@router.put(
    "/v1/walk/candidate/label",
    response_model=WalkResponse,
    tags=["candidate"],
    summary="Select the focal label",
)
async def select_label(
    request: SelectLabelRequest,
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    await services.explorer.select_label(request.label)
    return _walk_response(services)


@router.post(
    "/v1/walk/candidate/properties",
    response_model=WalkResponse,
    tags=["candidate"],
    summary="Add a property filter to the focal node",
)
async def add_property_filter(
    request: PropertyFilterRequest,
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    await services.explorer.add_property_filter(request.name, request.value)
    return _walk_response(services)


@router.delete(
    "/v1/walk/candidate/properties/{name}",
    response_model=WalkResponse,
    tags=["candidate"],
    summary="Remove a property filter from the focal node",
)
async def remove_property_filter(
    name: str,
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> WalkResponse:
    await services.explorer.remove_property_filter(name)
    return _walk_response(services)


# ==============================================================================
# Walk read operations
# ==============================================================================


@router.get(
    "/v1/walk/adjacent",
    response_model=AdjacencyResponse,
    tags=["walk"],
    summary="Relationships around the focal node, grouped by type",
)
async def adjacent_relationships(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> AdjacencyResponse:
    inbound, outbound = services.explorer.grouped_adjacency()
    return AdjacencyResponse(
        inbound=AdjacencyResponse.groups(inbound),
        outbound=AdjacencyResponse.groups(outbound),
        status=QueryStatus.of(services.explorer.adjacent),
    )


@router.get(
    "/v1/walk/property-keys",
    response_model=CountsResponse,
    tags=["walk"],
    summary="Property keys of the focal nodes",
)
async def property_keys(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> CountsResponse:
    return CountsResponse.of(services.explorer.property_keys)


@router.get(
    "/v1/walk/property-values/{name}",
    response_model=CountsResponse,
    tags=["walk"],
    summary="Values of one property on the focal nodes",
)
async def property_values(
    name: str,
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> CountsResponse:
    await services.explorer.property_values(name)
    return CountsResponse.of(services.explorer.value_query(name))


@router.get(
    "/v1/walk/next-labels",
    response_model=CountsResponse,
    tags=["walk"],
    summary="Labels reachable through the walk",
)
async def next_labels(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> CountsResponse:
    return CountsResponse.of(services.explorer.next_labels)


@router.get(
    "/v1/walk/queries",
    response_model=QueriesUsedResponse,
    tags=["walk"],
    summary="Cypher behind the current view",
)
async def queries_used(
    services: ServiceContainer = Depends(get_services),  # noqa: B008
) -> QueriesUsedResponse:
    return QueriesUsedResponse(queries=services.explorer.queries_used)
