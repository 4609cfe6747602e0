"""
Persistent log of daily summaries.

The log is a single JSON array. Appending means loading the array, adding one
entry and writing the whole array back, so callers must make sure only one
run writes at a time (see pipeline.RunLock).
"""

import io
import json
import logging
from pathlib import Path

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaInMemoryUpload, MediaIoBaseDownload

from .errors import FetchError
from .models import SummaryEntry
from .oauth import build_service

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


def parse_summaries(content: str, source: str) -> list[SummaryEntry]:
    """Decode the stored JSON array.

    Corrupt content or anything other than an array is treated as an empty
    log; non-object items inside the array are dropped.

    Args:
        content: Raw file content
        source: Description of where the content came from, for log messages

    Returns:
        List of SummaryEntry in stored order
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("Summary log %s is not valid JSON (%s); starting a new log", source, e)
        return []

    if not isinstance(data, list):
        logger.warning("Summary log %s does not hold an array; starting a new log", source)
        return []

    entries = [SummaryEntry.from_dict(item) for item in data if isinstance(item, dict)]
    if len(entries) != len(data):
        logger.warning("Dropped %d malformed item(s) from %s", len(data) - len(entries), source)
    return entries


def dump_summaries(entries: list[SummaryEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False, indent=2)


class DriveSummaryStore:
    """Summary log kept as a JSON file in a Google Drive folder."""

    def __init__(self, credentials, folder_id: str, file_name: str, timeout: int = 60):
        """Initialize the Drive-backed store.

        Args:
            credentials: OAuth 2.0 credentials object
            folder_id: ID of the Drive folder holding the log
            file_name: Name of the JSON file inside the folder

        Raises:
            ValueError: If the folder ID is empty.
        """
        if not folder_id:
            raise ValueError(
                "Google Drive folder ID not set. Set GOOGLE_DRIVE_FOLDER_ID in .env."
            )

        self.credentials = credentials
        self.folder_id = folder_id
        self.file_name = file_name
        self.timeout = timeout
        self._service = None
        self._file_id = None

    @property
    def service(self):
        """Lazily initialize and return the Google Drive service."""
        if self._service is None:
            self._service = build_service("drive", "v3", self.credentials, self.timeout)
        return self._service

    @property
    def location(self) -> str:
        return f"drive:{self.folder_id}/{self.file_name}"

    def find_file_id(self) -> str | None:
        """Look up the log file in the folder.

        Returns:
            The file ID, or None if the file does not exist yet.
        """
        if self._file_id:
            return self._file_id

        quoted_name = self.file_name.replace("\\", "\\\\").replace("'", "\\'")
        query = (
            f"'{self.folder_id}' in parents and "
            f"name = '{quoted_name}' and "
            f"trashed = false"
        )

        results = self.service.files().list(
            q=query,
            fields="files(id, name)",
            pageSize=1
        ).execute()

        files = results.get("files", [])
        if files:
            self._file_id = files[0]["id"]
        return self._file_id

    def download_text(self, file_id: str) -> str:
        request = self.service.files().get_media(fileId=file_id)
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, request)

        done = False
        while not done:
            _, done = downloader.next_chunk()

        return buffer.getvalue().decode("utf-8")

    def load_all(self) -> list[SummaryEntry]:
        """Load all stored summaries; empty if the file is missing or corrupt.

        Raises:
            FetchError: If Drive cannot be reached
        """
        try:
            file_id = self.find_file_id()
            if not file_id:
                logger.info("Summary log %s does not exist yet", self.location)
                return []
            content = self.download_text(file_id)
        except UnicodeDecodeError as e:
            logger.warning("Summary log %s is not UTF-8 (%s); starting a new log", self.location, e)
            return []
        except (HttpError, OSError) as e:
            raise FetchError("store", f"could not read {self.location}: {e}") from e

        entries = parse_summaries(content, self.location)
        logger.info("Loaded %d summaries from %s", len(entries), self.location)
        return entries

    def save_all(self, entries: list[SummaryEntry]) -> None:
        """Overwrite the log with the given entries, creating the file if needed.

        Raises:
            FetchError: If the upload fails
        """
        media = MediaInMemoryUpload(
            dump_summaries(entries).encode("utf-8"),
            mimetype=JSON_MIME_TYPE,
            resumable=False
        )

        try:
            file_id = self.find_file_id()
            if file_id:
                self.service.files().update(
                    fileId=file_id,
                    media_body=media,
                ).execute()
            else:
                file_metadata = {
                    "name": self.file_name,
                    "parents": [self.folder_id],
                    "mimeType": JSON_MIME_TYPE,
                }
                created = self.service.files().create(
                    body=file_metadata,
                    media_body=media,
                    fields="id"
                ).execute()
                self._file_id = created.get("id")
        except (HttpError, OSError) as e:
            raise FetchError("store", f"could not write {self.location}: {e}") from e

        logger.info("Saved %d summaries to %s", len(entries), self.location)


class LocalSummaryStore:
    """Summary log kept as a JSON file on the local disk."""

    def __init__(self, directory: str | Path, file_name: str):
        self.path = Path(directory) / file_name

    def load_all(self) -> list[SummaryEntry]:
        if not self.path.exists():
            logger.info("Summary log %s does not exist yet", self.path)
            return []

        try:
            content = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Summary log %s is not UTF-8 (%s); starting a new log", self.path, e)
            return []
        except OSError as e:
            raise FetchError("store", f"could not read {self.path}: {e}") from e

        return parse_summaries(content, str(self.path))

    def save_all(self, entries: list[SummaryEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Replaced atomically through a sibling temp file
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(dump_summaries(entries), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise FetchError("store", f"could not write {self.path}: {e}") from e

        logger.info("Saved %d summaries to %s", len(entries), self.path)


def make_store(settings, credentials=None):
    """Pick the summary store for the configured output location.

    LOCAL_OUTPUT_DIR takes precedence over the Drive folder.
    """
    if settings.local_output_dir:
        return LocalSummaryStore(settings.local_output_dir, settings.summary_file_name)
    return DriveSummaryStore(
        credentials,
        settings.drive_folder_id,
        settings.summary_file_name,
        timeout=settings.http_timeout,
    )


def append_summary(store, entry: SummaryEntry) -> list[SummaryEntry]:
    """Append one entry to the log (load, push, save).

    Returns:
        The full list as written
    """
    entries = store.load_all()
    entries.append(entry)
    store.save_all(entries)
    return entries
