from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from leadintake.core.deps import require_admin_login
from leadintake.core.exceptions import NotFoundError

# Served at the site root, outside /api/v1; HTML and assets sit behind the same Basic Auth lock
router = APIRouter(prefix="/admin", tags=["admin-ui"], dependencies=[Depends(require_admin_login)], include_in_schema=False)


def _ui_dir(request: Request) -> Path:
    ui_dir = Path(request.app.state.settings.ADMIN_UI_DIR).resolve()
    if not (ui_dir / "index.html").is_file():
        raise NotFoundError("Admin UI not found")
    return ui_dir


@router.get("")
@router.get("/")
def admin_index(request: Request):
    return FileResponse(_ui_dir(request) / "index.html")


@router.get("/{path:path}")
def admin_asset(path: str, request: Request):
    ui_dir = _ui_dir(request)
    target = (ui_dir / path).resolve()
    if ui_dir not in target.parents or not target.is_file():
        raise NotFoundError("Not Found")
    return FileResponse(target)
