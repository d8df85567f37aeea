import io
import re
import zipfile
from typing import Iterable

from shot_api.models import ArchiveEntry, CaptureResult

MAX_NAME_LENGTH = 50

_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def entry_name(url: str, index: int) -> str:
    """Zip entry name for the screenshot at 0-based ``index``.

    The 1-based position prefix keeps URLs that sanitize to the same name
    distinct inside the archive.
    """
    safe_name = _UNSAFE.sub("_", url).lower()[:MAX_NAME_LENGTH]
    return f"screenshot_{index + 1}_{safe_name}.png"


def build_entries(results: Iterable[CaptureResult]) -> list[ArchiveEntry]:
    return [
        ArchiveEntry(
            entry_name=entry_name(result.source_url, result.original_index),
            content=result.image_bytes,
        )
        for result in results
    ]


def pack(entries: Iterable[ArchiveEntry]) -> bytes:
    """Write ``entries`` into an in-memory zip and return its bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for entry in entries:
            archive.writestr(entry.entry_name, entry.content)
    return buffer.getvalue()
