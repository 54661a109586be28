"""HTML views and static assets shipped inside the package."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from fastapi.templating import Jinja2Templates

WEB_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class StaticAssetError(Exception):
    pass


def render_template(
    request: Request, name: str, context: Optional[Dict[str, Any]] = None
):
    """Render ``name`` eagerly; jinja2 errors propagate to the caller."""
    return templates.TemplateResponse(
        request, name, context or {}, media_type="text/html"
    )


def resolve_static(path: str, root: Path = STATIC_DIR) -> Tuple[bytes, str]:
    """Return (content, media type) for ``path`` relative to the static root.

    Paths that escape the root, directories and missing files all raise
    ``StaticAssetError``.
    """
    relative = path.lstrip("/")
    if relative.startswith("static/"):
        relative = relative[len("static/"):]
    base = root.resolve()
    target = (base / relative).resolve()
    if target != base and base not in target.parents:
        raise StaticAssetError(f"path escapes static root: {path}")
    if not target.is_file():
        raise StaticAssetError(f"no such static asset: {path}")
    try:
        content = target.read_bytes()
    except OSError as e:
        raise StaticAssetError(f"failed to read {target}: {e}") from e
    media_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
    return content, media_type
