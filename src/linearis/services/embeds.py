"""Download files uploaded to Linear (uploads.linear.app)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote, urlsplit

from linearis.errors import FileWriteError, ValidationError
from linearis.transform import UPLOADS_HOST

if TYPE_CHECKING:
    from linearis.client import LinearClient


def default_filename(url: str) -> str:
    segments = [s for s in urlsplit(url).path.split("/") if s]
    if not segments:
        raise ValidationError(f'Cannot derive a file name from "{url}", pass --output')
    return unquote(segments[-1])


class EmbedsService:
    def __init__(self, client: LinearClient):
        self._client = client

    async def download(
        self,
        url: str,
        output: str | Path | None = None,
        overwrite: bool = False,
    ) -> dict[str, Any]:
        if (urlsplit(url).hostname or "") != UPLOADS_HOST:
            raise ValidationError(f'Not a Linear upload URL: "{url}"')
        target = Path(output) if output else Path(default_filename(url))
        if target.exists() and not overwrite:
            raise ValidationError(f'File "{target}" already exists, use --overwrite to replace it')

        content = await self._client.fetch(url, operation=f'download "{url}"')
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise FileWriteError(str(target), e.strerror or str(e)) from e
        return {"success": True, "filePath": str(target), "size": len(content)}
