"""
Filesystem backends for the guarded file operator.

The operator never touches the host filesystem directly; it goes through a
FileSystem backend. LocalFileSystem wraps pathlib and shutil, MemoryFileSystem
keeps everything in a dict so tests stay hermetic.
"""

import io
import posixpath
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, IO, Set


class FileSystem(ABC):
    """Primitive filesystem actions used by the guarded operator."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if anything (file or directory) exists at path."""

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Check if path is an existing regular file."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check if path is an existing directory."""

    @abstractmethod
    def create_text(self, path: str, encoding: str = "utf-8") -> IO[str]:
        """
        Create a new file and return a writable text handle.

        Raises:
            FileExistsError: If something already exists at path
        """

    @abstractmethod
    def open_text(self, path: str, encoding: str = "utf-8") -> IO[str]:
        """Open an existing file and return a readable text handle."""

    @abstractmethod
    def copy_file(self, src: str, dst: str) -> None:
        """Duplicate the bytes of src into a new file at dst."""

    @abstractmethod
    def move_file(self, src: str, dst: str) -> None:
        """Relocate src to dst."""

    @abstractmethod
    def remove_file(self, path: str) -> None:
        """Delete the file at path."""

    @abstractmethod
    def make_dirs(self, path: str) -> None:
        """Create a directory and any missing parents."""

    @abstractmethod
    def size(self, path: str) -> int:
        """Size of a file in bytes."""


class LocalFileSystem(FileSystem):
    """Backend for the host filesystem."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_file(self, path: str) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def create_text(self, path: str, encoding: str = "utf-8") -> IO[str]:
        # "x" refuses to truncate a file that appeared after the check
        return open(path, "x", encoding=encoding, newline="")

    def open_text(self, path: str, encoding: str = "utf-8") -> IO[str]:
        return open(path, "r", encoding=encoding)

    def copy_file(self, src: str, dst: str) -> None:
        shutil.copy2(src, dst)  # copy2 preserves metadata

    def move_file(self, src: str, dst: str) -> None:
        shutil.move(src, dst)

    def remove_file(self, path: str) -> None:
        Path(path).unlink()

    def make_dirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def size(self, path: str) -> int:
        return Path(path).stat().st_size


class _MemoryWriter(io.StringIO):
    """Text buffer that stores its content in a MemoryFileSystem on close."""

    def __init__(self, fs: "MemoryFileSystem", path: str, encoding: str):
        super().__init__()
        self._fs = fs
        self._path = path
        self._encoding = encoding

    def close(self) -> None:
        if not self.closed:
            self._fs.files[self._path] = self.getvalue().encode(self._encoding)
        super().close()


class MemoryFileSystem(FileSystem):
    """
    In-memory backend.

    Paths are POSIX-style and normalised; relative paths are taken relative to
    the root. A file or directory can only be created inside an existing
    directory, the same as on disk.
    """

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.dirs: Set[str] = {"/"}

    def _norm(self, path: str) -> str:
        # normpath keeps a leading "//", so collapse it to a single root
        return "/" + posixpath.normpath(posixpath.join("/", path)).lstrip("/")

    def _require_parent(self, path: str) -> None:
        parent = posixpath.dirname(path)
        if parent not in self.dirs:
            raise FileNotFoundError(f"No such directory: {parent}")

    def exists(self, path: str) -> bool:
        path = self._norm(path)
        return path in self.files or path in self.dirs

    def is_file(self, path: str) -> bool:
        return self._norm(path) in self.files

    def is_dir(self, path: str) -> bool:
        return self._norm(path) in self.dirs

    def create_text(self, path: str, encoding: str = "utf-8") -> IO[str]:
        path = self._norm(path)
        if self.exists(path):
            raise FileExistsError(f"File exists: {path}")
        self._require_parent(path)
        writer = _MemoryWriter(self, path, encoding)
        self.files[path] = b""
        return writer

    def open_text(self, path: str, encoding: str = "utf-8") -> IO[str]:
        path = self._norm(path)
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        return io.StringIO(self.files[path].decode(encoding))

    def copy_file(self, src: str, dst: str) -> None:
        src, dst = self._norm(src), self._norm(dst)
        if src not in self.files:
            raise FileNotFoundError(f"No such file: {src}")
        if self.exists(dst):
            raise FileExistsError(f"File exists: {dst}")
        self._require_parent(dst)
        self.files[dst] = self.files[src]

    def move_file(self, src: str, dst: str) -> None:
        src, dst = self._norm(src), self._norm(dst)
        if src not in self.files:
            raise FileNotFoundError(f"No such file: {src}")
        if self.exists(dst):
            raise FileExistsError(f"File exists: {dst}")
        self._require_parent(dst)
        self.files[dst] = self.files.pop(src)

    def remove_file(self, path: str) -> None:
        path = self._norm(path)
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        del self.files[path]

    def make_dirs(self, path: str) -> None:
        path = self._norm(path)
        if path in self.files:
            raise FileExistsError(f"File exists: {path}")
        missing = []
        while path not in self.dirs:
            if path in self.files:
                raise NotADirectoryError(f"Not a directory: {path}")
            missing.append(path)
            path = posixpath.dirname(path)
        self.dirs.update(missing)

    def size(self, path: str) -> int:
        return len(self.files[self._norm(path)])
