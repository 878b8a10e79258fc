from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sgpc_archive.api.endpoints import router as api_router
from sgpc_archive.core.logging import configure_logging
from sgpc_archive.core.settings import settings
from sgpc_archive.services.classification import ClassificationIndex
from sgpc_archive.services.directory import DirectoryService


def build_directory_service() -> DirectoryService:
    classification = ClassificationIndex(settings.CLASSIFICATION_BASE, dataset_path=settings.CLASSIFICATION_DATASET)
    return DirectoryService(classification, archive_root=settings.KIRTAN_BASE, timeout=settings.HTTP_TIMEOUT)


@asynccontextmanager
async def lifespan(application: FastAPI):
    configure_logging()
    # Built once per process; the classification dataset is parsed on first use
    if getattr(application.state, "directory_service", None) is None:
        application.state.directory_service = build_directory_service()
    yield
    await application.state.directory_service.aclose()

app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")
