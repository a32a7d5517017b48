"""
Vitrine Backend: Page & Static Asset Resolver
===============================================

What:  The catch-all GET route. Anything the API routers did not match is
       resolved to a file from the site or public content directories.
How:   An ordered list of matchers; the first one whose `matches()` accepts
       the path resolves it. The last matcher accepts everything.

Matchers (in order):
    AdminPageMatcher    /admin                 → <site_root>/admin.html
    CleanUrlMatcher     path without any "."   → <site_root>/<path>.html,
                                                 else <site_root>/index.html
    StaticAssetMatcher  everything else        → <public_root>/<path>,
                                                 else <site_root>/<path>,
                                                 else 404

    Examples:
        /admin          → admin.html
        /about          → about.html (or index.html when there is no about page)
        /               → index.html
        /style.css      → style.css
        /uploads/x.jpg  → public/uploads/x.jpg

A path that would escape its root (e.g. /../secret) is never served; it is a 404.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from fastapi import APIRouter
from fastapi.responses import FileResponse

from vitrine.config import settings
from vitrine.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


def safe_join(root: Path, request_path: str) -> Optional[Path]:
    """
    `root / request_path` as an existing file inside `root`, or None.
    """
    relative = request_path.lstrip("/")
    if not relative:
        return None
    try:
        candidate = (root / relative).resolve()
        if candidate != root and root not in candidate.parents:
            logger.warning("Rejected path outside %s: %s", root, request_path)
            return None
        if not candidate.is_file():
            return None
    except (ValueError, OSError) as e:
        # e.g. an embedded NUL byte from %00
        logger.warning("Rejected unusable path %r: %s", request_path, str(e))
        return None
    return candidate


class PageMatcher(ABC):
    """One stage of the catch-all resolver."""

    @abstractmethod
    def matches(self, path: str) -> bool:
        ...

    @abstractmethod
    def resolve(self, path: str) -> Optional[Path]:
        """File to serve for `path`, or None for a 404."""
        ...


class AdminPageMatcher(PageMatcher):
    def __init__(self, site_root: Path, admin_path: str, admin_page: str):
        self.site_root = site_root
        self.admin_path = admin_path
        self.admin_page = admin_page

    def matches(self, path: str) -> bool:
        return path == self.admin_path

    def resolve(self, path: str) -> Optional[Path]:
        return safe_join(self.site_root, self.admin_page)


class CleanUrlMatcher(PageMatcher):
    """Extension-less paths: `<path>.html` if present, otherwise the index page."""

    def __init__(self, site_root: Path, index_page: str):
        self.site_root = site_root
        self.index_page = index_page

    def matches(self, path: str) -> bool:
        return "." not in path

    def resolve(self, path: str) -> Optional[Path]:
        page_path = path.rstrip("/")
        if page_path:
            page = safe_join(self.site_root, page_path + ".html")
            if page is not None:
                return page
        return safe_join(self.site_root, self.index_page)


class StaticAssetMatcher(PageMatcher):
    """Default stage: serve the path verbatim from the first root that has it."""

    def __init__(self, roots: Sequence[Path]):
        self.roots = list(roots)

    def matches(self, path: str) -> bool:
        return True

    def resolve(self, path: str) -> Optional[Path]:
        for root in self.roots:
            found = safe_join(root, path)
            if found is not None:
                return found
        return None


class PageResolver:
    """Runs the matchers in order and returns the file for a request path."""

    def __init__(self, matchers: List[PageMatcher]):
        self.matchers = matchers

    @classmethod
    def from_settings(cls) -> "PageResolver":
        site_root = settings.site_root_path
        return cls(
            [
                AdminPageMatcher(site_root, settings.admin_path, settings.admin_page),
                CleanUrlMatcher(site_root, settings.index_page),
                StaticAssetMatcher([settings.public_root_path, site_root]),
            ]
        )

    def resolve(self, path: str) -> Path:
        """
        Raises:
            NotFoundError: the first matching stage found no file.
        """
        for matcher in self.matchers:
            if matcher.matches(path):
                resolved = matcher.resolve(path)
                if resolved is None:
                    raise NotFoundError(resource="file", message="File not found", context={"path": path})
                return resolved
        raise NotFoundError(resource="file", message="File not found", context={"path": path})


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_page(full_path: str) -> FileResponse:
    path = "/" + full_path
    resolved = PageResolver.from_settings().resolve(path)
    return FileResponse(path=str(resolved))
