"""
Content Store: reads entries for one content kind from disk.

- Posts    -> <root>/posts/<slug>.mdx
- Projects -> <root>/projects/<slug>.mdx

Every call re-reads the directory; nothing is cached between calls.
"""

from __future__ import annotations

import logging
import pathlib
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .config import (
    CONTENT_EXT,
    KINDS,
    MAX_READ_WORKERS,
    default_content_root,
)
from .errors import ContentDirectoryError, ParseError, UnknownKindError
from .frontmatter import parse_frontmatter
from .models import ContentEntry, Metadata
from .utils import is_safe_slug, natural_key, slug_from_path

logger = logging.getLogger(__name__)


def read_entry(kind: str, path: pathlib.Path) -> ContentEntry:
    """Read and parse one content file. Raises OSError or ParseError."""
    text = path.read_text(encoding="utf-8")
    fm, body = parse_frontmatter(text, path)
    return ContentEntry(
        kind=kind,
        slug=slug_from_path(path),
        metadata=Metadata.from_mapping(fm),
        body=body,
        path=path,
    )


class ContentStore:
    def __init__(
        self,
        root: pathlib.Path | str | None = None,
        max_workers: int = MAX_READ_WORKERS,
    ) -> None:
        self.root = pathlib.Path(root) if root is not None else default_content_root()
        self.max_workers = max(1, max_workers)

    def directory(self, kind: str) -> pathlib.Path:
        if kind not in KINDS:
            raise UnknownKindError(kind)
        return self.root / kind

    def _content_files(self, kind: str) -> List[pathlib.Path]:
        src_dir = self.directory(kind)
        if not src_dir.is_dir():
            raise ContentDirectoryError(f"content directory not found: {src_dir}")
        try:
            files = [
                p
                for p in src_dir.iterdir()
                if p.suffix == CONTENT_EXT and p.is_file()
            ]
        except OSError as exc:
            raise ContentDirectoryError(
                f"cannot read content directory {src_dir}: {exc}"
            ) from exc
        files.sort(key=lambda p: natural_key(p.name))
        return files

    def slugs(self, kind: str) -> List[str]:
        return [slug_from_path(p) for p in self._content_files(kind)]

    def _try_read(self, kind: str, path: pathlib.Path) -> Optional[ContentEntry]:
        try:
            return read_entry(kind, path)
        except ParseError as exc:
            logger.warning("skipping %s: %s", path.name, exc)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("skipping %s: cannot read file: %s", path.name, exc)
        return None

    def list_all(self, kind: str) -> List[ContentEntry]:
        files = self._content_files(kind)
        if not files:
            return []

        workers = min(self.max_workers, len(files))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda p: self._try_read(kind, p), files))

        entries = [e for e in results if e is not None]
        logger.debug(
            "loaded %d/%d %s from %s",
            len(entries), len(files), kind, self.directory(kind),
        )
        return entries

    def get_by_slug(self, kind: str, slug: str) -> Optional[ContentEntry]:
        """
        Return the entry stored under `slug`, or None when no such file exists.

        Parse errors propagate; a missing file is not an error.
        """
        src_dir = self.directory(kind)
        if not is_safe_slug(slug):
            return None
        path = src_dir / f"{slug}{CONTENT_EXT}"
        try:
            return read_entry(kind, path)
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("no %s entry for slug %r", kind, slug)
            return None
