from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from src.medinote_mock.config import settings
from src.medinote_mock.errors import StorageError


def chunk_filename(session_id: str, chunk_number: str) -> str:
    return f"{session_id}_chunk_{chunk_number}.wav"


class AudioStorageBackend(ABC):
    @abstractmethod
    def save_chunk(self, session_id: str, chunk_number: str, content: bytes) -> str:
        """Persist one chunk's bytes and return its storage location.

        Raises :class:`StorageError` if the bytes could not be written.
        """

    @abstractmethod
    def find_chunk(self, session_id: str, chunk_number: str) -> Optional[Path]:
        """Return the local path of a stored chunk, or ``None``."""


class LocalAudioStorageBackend(AudioStorageBackend):
    """Writes each chunk to ``<base>/<session>_chunk_<n>.wav``.

    Re-uploading a chunk replaces the previous bytes.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base: Path = Path(base_dir) if base_dir is not None else settings.audio_upload_dir

    @property
    def base_dir(self) -> Path:
        return self._base

    def save_chunk(self, session_id: str, chunk_number: str, content: bytes) -> str:
        dest_path = self._base / chunk_filename(session_id, chunk_number)
        try:
            self._base.mkdir(parents=True, exist_ok=True)
            dest_path.write_bytes(content)
        except OSError as exc:
            raise StorageError("Upload failed", details=str(exc)) from exc
        return str(dest_path)

    def find_chunk(self, session_id: str, chunk_number: str) -> Optional[Path]:
        path = self._base / chunk_filename(session_id, chunk_number)
        if path.is_file():
            return path
        return None
