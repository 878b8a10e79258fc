from fastapi import APIRouter, Depends, HTTPException, Request

from sgpc_archive.core.settings import settings
from sgpc_archive.domain.models import DirectoryListing
from sgpc_archive.services.directory import DirectoryService
from sgpc_archive.services.explorer import filter_entries, sort_entries
from sgpc_archive.services.paths import is_within

router = APIRouter()


def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory_service

@router.get("/health")
async def health_check():
    return {"status": "ok"}

@router.get("/ready")
async def readiness_check(service: DirectoryService = Depends(get_directory_service)):
    try:
        records = service.classification.load_records()
    except (OSError, UnicodeDecodeError) as e:
        return {"status": "degraded", "message": f"Classification dataset unavailable: {e}"}
    return {"status": "ready", "classification_records": len(records)}

@router.get("/connectivity/sgpc")
async def check_sgpc_connection(service: DirectoryService = Depends(get_directory_service)):
    return await service.check_connectivity()

@router.get("/roots")
async def list_roots() -> dict[str, str]:
    return settings.roots

@router.get("/directory")
async def browse_directory(
    url: str | None = None,
    q: str = "",
    service: DirectoryService = Depends(get_directory_service),
) -> DirectoryListing:
    url = url or settings.KIRTAN_BASE
    # Only the archive roots may be fetched on behalf of a caller
    if not any(is_within(url, root) for root in settings.roots.values()):
        raise HTTPException(status_code=400, detail=f"Not an archive URL: {url}")
    entries = await service.fetch_directory(url)
    return DirectoryListing(url=url, entries=filter_entries(sort_entries(entries), q))

@router.get("/directory/{tab}")
async def browse_tab(
    tab: str,
    q: str = "",
    service: DirectoryService = Depends(get_directory_service),
) -> DirectoryListing:
    root = settings.roots.get(tab)
    if root is None:
        raise HTTPException(status_code=404, detail=f"Unknown tab: {tab}")
    entries = await service.fetch_directory(root)
    return DirectoryListing(url=root, entries=filter_entries(sort_entries(entries), q))
