"""
Note persistence: an ordered list of notes kept in one binary file.

File layout (big-endian):
    b"JOTR" | version:u8 | count:u32 | count * (created_at:i64 | length:u32 | body:utf-8)
"""
import logging
import os
import struct
import tempfile
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

log = logging.getLogger(__name__)

MAGIC = b'JOTR'
VERSION = 1
HEADER = struct.Struct('>4sBI')
RECORD = struct.Struct('>qI')
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


class StoreError(Exception):
    pass


class CorruptStoreError(StoreError):
    """The backing file exists but does not hold a well-formed note sequence."""

    def __init__(self, path: Path, offset: int, reason: str):
        super().__init__(f"{path}: {reason} at byte {offset}")
        self.path = path
        self.offset = offset
        self.reason = reason


class StoreWriteError(StoreError):
    """The backing file could not be rewritten."""


@dataclass(frozen=True)
class Note:
    created_at: int
    body: str

    @property
    def title_or_id(self) -> str:
        return datetime.fromtimestamp(self.created_at, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)

    @property
    def preview(self) -> str:
        return self.body.split('\n', 1)[0]


def encode_notes(notes: Sequence[Note]) -> bytes:
    out = [HEADER.pack(MAGIC, VERSION, len(notes))]
    for n in notes:
        try:
            datetime.fromtimestamp(n.created_at, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"timestamp {n.created_at} cannot be stored") from None
        raw = n.body.encode('utf-8')
        out.append(RECORD.pack(n.created_at, len(raw)))
        out.append(raw)
    return b''.join(out)


def decode_notes(data: bytes, path: Path) -> List[Note]:
    if len(data) < HEADER.size:
        raise CorruptStoreError(path, 0, "truncated header")
    magic, version, count = HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise CorruptStoreError(path, 0, "bad magic")
    if version != VERSION:
        raise CorruptStoreError(path, 4, f"unsupported version {version}")
    pos = HEADER.size
    notes = []
    for _ in range(count):
        if pos + RECORD.size > len(data):
            raise CorruptStoreError(path, pos, "truncated record header")
        created_at, length = RECORD.unpack_from(data, pos)
        try:
            datetime.fromtimestamp(created_at, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise CorruptStoreError(path, pos, f"invalid timestamp {created_at}") from None
        pos += RECORD.size
        if pos + length > len(data):
            raise CorruptStoreError(path, pos, "truncated body")
        try:
            body = data[pos:pos + length].decode('utf-8')
        except UnicodeDecodeError:
            raise CorruptStoreError(path, pos, "body is not valid utf-8") from None
        pos += length
        notes.append(Note(created_at, body))
    if pos != len(data):
        raise CorruptStoreError(path, pos, f"{len(data) - pos} trailing bytes")
    return notes


class NoteStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._notes: List[Note] = []

    def __len__(self):
        return len(self._notes)

    @property
    def notes(self) -> Sequence[Note]:
        return tuple(self._notes)

    def load(self) -> List[Note]:
        """Replace the in-memory notes with the file's contents; a missing file is an empty store."""
        if not self.path.exists():
            log.info("No notes file at %s, starting empty", self.path)
            self._notes = []
            return []
        data = self.path.read_bytes()
        try:
            notes = decode_notes(data, self.path)
        except CorruptStoreError as e:
            log.warning("Corrupt notes file: %s", e)
            raise
        self._notes = list(notes)
        log.info("Loaded %d notes from %s", len(notes), self.path)
        return notes

    def save(self):
        try:
            data = encode_notes(self._notes)
        except (ValueError, struct.error) as e:
            log.error("Could not encode notes for %s: %s", self.path, e)
            raise StoreWriteError(f"could not encode notes: {e}") from e
        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=self.path.name + '.', suffix='.tmp', dir=str(self.path.parent))
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp is not None:
                try:
                    os.unlink(tmp)
                except OSError:
                    pass
            log.exception("Could not write %s", self.path)
            raise StoreWriteError(f"could not write {self.path}: {e}") from e
        log.info("Saved %d notes to %s", len(self._notes), self.path)

    def append_and_persist(self, note: Note):
        self._notes.append(note)
        try:
            self.save()
        except BaseException:
            self._notes.pop()
            raise

    def new_note(self, body: str, now: Optional[int] = None) -> Note:
        ts = int(time.time()) if now is None else now
        if self._notes and ts <= self._notes[-1].created_at:
            ts = self._notes[-1].created_at + 1
        return Note(ts, body)
