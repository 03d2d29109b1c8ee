"""HTTP surface of the trusted content service.

Handlers are thin: they unpack the request, run one use case and return its
result. Every ``TrustApiError`` raised below is rendered by a single exception
handler as ``{"status": <code>, "error": <message>}``.
"""

import logging
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .container import Container
from ..core.domain.errors import MissingQueryArgument, TrustApiError
from ..core.usecases.fetch_sbom import FetchSbomUseCase
from ..core.usecases.get_package import GetPackageUseCase
from ..core.usecases.list_trusted import ListTrustedUseCase
from ..core.usecases.query_dependencies import QueryDependenciesUseCase
from ..core.usecases.query_packages import QueryPackagesUseCase
from ..core.usecases.query_versions import QueryVersionsUseCase

logger = logging.getLogger(__name__)

router = APIRouter(tags=["package"])

SBOM_FILENAME = "sbom.json"


@router.get("/api/package")
@inject
def get_package(
    purl: Optional[str] = Query(default=None, description="Package URL to query"),
    uc: GetPackageUseCase = Depends(Provide[Container.get_package_uc]),
):
    if purl is None:
        raise MissingQueryArgument()
    return uc.execute(purl)


@router.get("/api/trusted")
@inject
def get_trusted(uc: ListTrustedUseCase = Depends(Provide[Container.list_trusted_uc])):
    """Get the entire inventory."""
    return uc.execute()


@router.post("/api/package")
@inject
def query_package(
    purls: list[str] = Body(...),
    uc: QueryPackagesUseCase = Depends(Provide[Container.query_packages_uc]),
):
    return uc.execute(purls)


@router.post("/api/package/dependencies")
@inject
def query_package_dependencies(
    purls: list[str] = Body(...),
    uc: QueryDependenciesUseCase = Depends(Provide[Container.query_dependencies_uc]),
):
    return uc.execute(purls)


@router.post("/api/package/dependents")
@inject
def query_package_dependents(
    purls: list[str] = Body(...),
    uc: QueryDependenciesUseCase = Depends(Provide[Container.query_dependents_uc]),
):
    return uc.execute(purls)


@router.post("/api/package/versions")
@inject
def query_package_versions(
    purls: list[str] = Body(...),
    uc: QueryVersionsUseCase = Depends(Provide[Container.query_versions_uc]),
):
    return uc.execute(purls)


@router.get("/api/package/sbom")
@inject
def query_sbom(
    purl: Optional[str] = Query(default=None),
    download: bool = Query(default=False),
    uc: FetchSbomUseCase = Depends(Provide[Container.fetch_sbom_uc]),
):
    if purl is None:
        raise MissingQueryArgument()
    document = uc.execute(purl)
    headers = {}
    if download:
        headers["Content-Disposition"] = f'attachment; filename="{SBOM_FILENAME}"'
    return JSONResponse(content=document, headers=headers)


async def trust_api_error_handler(request: Request, exc: TrustApiError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input (e.g. a POST body that is not a list of strings) is a 400 in the usual error shape."""
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}" for err in exc.errors()
    )
    logger.info("%s %s -> 400: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=400, content={"status": 400, "error": f"Invalid request: {detail}"})


def create_app(container: Container | None = None) -> FastAPI:
    container = container or Container()
    container.wire(modules=[__name__])

    app = FastAPI(title="Trusted Content API", description="An API server for trusted content")
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TrustApiError, trust_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app
