"""
HTML page routes.

Each registered page renders the base document with its static metadata and
exactly one top-level component shell.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from portal.pages import PAGES, PageRoute
from portal.utils.logger import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"])


def render_page(request: Request, page: PageRoute, shift_id: Optional[int] = None) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "base.html",
        {"page": page, "shift_id": shift_id},
    )


def _page_endpoint(page: PageRoute):
    if "{shift_id}" in page.path:
        async def endpoint(request: Request, shift_id: int) -> HTMLResponse:
            return render_page(request, page, shift_id=shift_id)
    else:
        async def endpoint(request: Request) -> HTMLResponse:
            return render_page(request, page)
    return endpoint


for _page in PAGES:
    # Non-numeric shift ids fall through to 404 instead of failing validation
    router.add_api_route(
        _page.path.replace("{shift_id}", "{shift_id:int}"),
        _page_endpoint(_page),
        methods=["GET"],
        response_class=HTMLResponse,
        include_in_schema=False,
        name=f"page:{_page.path}",
    )


@router.get("/api/pages")
async def list_pages() -> Dict[str, List[Dict[str, Any]]]:
    """Registered page routes with their metadata and component."""
    return {"data": [page.as_dict() for page in PAGES]}
