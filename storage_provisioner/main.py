from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from storage_provisioner.errors import ConfigurationError, GrantFormatError, ProvisioningError
from storage_provisioner.logging_config import ensure_logging
from storage_provisioner.routes.volumes import router as volumes_router
from storage_provisioner.services.object_store_service import (
    ResourceAlreadyExistsError,
    VolumeNotFoundError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(volumes_router)


@app.exception_handler(ConfigurationError)
@app.exception_handler(GrantFormatError)
async def invalid_configuration_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


@app.exception_handler(ProvisioningError)
async def provisioning_error_handler(request: Request, exc: ProvisioningError) -> JSONResponse:
    """Map object-store failures to a consistent HTTP response.

    Duplicates and missing parent volumes keep their meaning (409/404); every
    other collaborator failure becomes 502 Bad Gateway so upstream details do
    not leak to API consumers beyond the message.

    Returns:
        A JSON body: {"detail": "..."}
    """
    if isinstance(exc, ResourceAlreadyExistsError):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, VolumeNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def configuration_missing_handler(request: Request, exc: ValueError) -> JSONResponse:
    # Raised by ObjectStoreConfig.from_env when OBJECT_STORE_* is missing or invalid.
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.get("/")
async def root():
    return {"message": "storage-provisioner is running."}
