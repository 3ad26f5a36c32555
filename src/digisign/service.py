from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from .client import DigiSignClient
from .endpoints import EnvelopeDocumentsEndpoint
from .exceptions import DigiSignError
from .models import DownloadResult, EnvelopeDocument
from .util import guess_extension, safe_filename

logger = logging.getLogger(__name__)


class EnvelopeDownloadService:
    """Saves every document of an envelope to ``<out_dir>/<envelope_id>/``."""

    def __init__(self, client: DigiSignClient):
        self.client = client

    def download(self, envelope_id: str, out_dir: Path) -> DownloadResult:
        started = datetime.now(tz=timezone.utc)
        target_dir = out_dir.resolve() / safe_filename(envelope_id)
        target_dir.mkdir(parents=True, exist_ok=True)

        downloaded: list[Path] = []
        failures: list[str] = []

        documents = self.client.envelopes().documents(envelope_id)
        position = 0
        page = 1
        while True:
            listing = documents.list({"page": page})
            for index in range(len(listing)):
                position += 1
                try:
                    downloaded.append(self._save_document(documents, listing[index], position, target_dir))
                except (DigiSignError, ValueError, OSError) as e:
                    msg = f"Document #{position} of envelope {envelope_id} failed: {e}"
                    logger.warning(msg)
                    failures.append(msg)
            if not listing or not listing.has_next_page:
                break
            page += 1

        if downloaded and failures:
            status = "partial"
        elif failures:
            status = "failed"
        else:
            status = "ok"
        return DownloadResult(
            envelope_id=envelope_id,
            out_dir=target_dir,
            downloaded_files=downloaded,
            failures=failures,
            started_at=started,
            finished_at=datetime.now(tz=timezone.utc),
            status=status,
        )

    def _save_document(
        self,
        documents: EnvelopeDocumentsEndpoint,
        document: EnvelopeDocument,
        position: int,
        target_dir: Path,
    ) -> Path:
        if not document.id:
            raise ValueError(f"document {document.name or ''!r} has no id")
        with documents.download(document) as file:
            name = file.filename or document.name or f"document_{position}"
            if "." not in name:
                name = f"{name}.{guess_extension(file.content_type)}"
            return file.save(target_dir / f"{position:02d}_{safe_filename(name)}")
