"""
Guarded file operations for GuardFS.

Each operation checks the state it relies on (the path exists, or does not)
right before acting. A failed check is reported and the call returns without
touching the filesystem; nothing is raised for these expected conditions.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console

from core.logger import AuditLogger, ActionType, ActionStatus
from .backends import FileSystem, LocalFileSystem


@dataclass
class OperationResult:
    """Outcome of one guarded operation."""
    operation: str
    status: ActionStatus
    message: str
    data: Optional[List[str]] = None
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return self.status in (ActionStatus.EXECUTED, ActionStatus.DRY_RUN)


_STYLES = {
    ActionStatus.EXECUTED: "green",
    ActionStatus.DRY_RUN: "cyan",
    ActionStatus.CONFLICT: "yellow",
    ActionStatus.FAILED: "red",
}


class GuardedFileOperator:
    """Create, read, copy, move and delete files with existence guards."""

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        logger: Optional[AuditLogger] = None,
        console: Optional[Console] = None,
        encoding: str = "utf-8",
        output: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize GuardedFileOperator.

        Args:
            fs: Filesystem backend (default: the host filesystem)
            logger: Audit logger; nothing is audited when omitted
            console: Console for status lines (default: stdout)
            encoding: Text encoding for create and read
            output: Sink for lines streamed by read (default: the console)
        """
        self.fs = fs or LocalFileSystem()
        self.logger = logger
        self.console = console or Console()
        self.encoding = encoding
        self.output = output or self._print_line

    def _print_line(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, soft_wrap=True)

    def _say(self, message: str, style: Optional[str] = None) -> None:
        self.console.print(message, style=style, markup=False, highlight=False)

    def _finish(
        self,
        action_type: ActionType,
        status: ActionStatus,
        message: str,
        description: str,
        data: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        dry_run: bool = False
    ) -> OperationResult:
        """Report the outcome on the console and in the audit log."""
        self._say(message, style=_STYLES[status])

        if self.logger is not None:
            try:
                self.logger.log_action(
                    action_type=action_type,
                    description=description,
                    status=status,
                    result=message,
                    metadata=metadata
                )
            except OSError as e:
                self._say(f"Audit log unavailable: {e}", style="red")

        return OperationResult(
            operation=action_type.value,
            status=status,
            message=message,
            data=data,
            dry_run=dry_run
        )

    def create_file(self, path: str, content: str, dry_run: bool = False) -> OperationResult:
        """
        Create a new file with content.

        The content is written followed by a line terminator, unless it
        already ends with one.

        Args:
            path: Path where file should be created
            content: Text to write to the file
            dry_run: If True, only preview the action

        Returns:
            OperationResult; CONFLICT if something already exists at path
        """
        text = content if content.endswith("\n") else content + "\n"
        metadata = {"path": path, "content_length": len(text)}

        if self.fs.exists(path):
            return self._finish(
                ActionType.CREATE, ActionStatus.CONFLICT,
                "Cannot write! File already exists",
                f"Create {path}", metadata=metadata
            )

        if dry_run:
            return self._finish(
                ActionType.CREATE, ActionStatus.DRY_RUN,
                f"DRY-RUN: Would create {path}",
                f"Create {path}", metadata=metadata, dry_run=True
            )

        self._say("File does not exist. Creating file...")
        try:
            with self.fs.create_text(path, encoding=self.encoding) as f:
                f.write(text)
        except OSError as e:
            return self._finish(
                ActionType.CREATE, ActionStatus.FAILED,
                f"Failed to create {path}: {e}",
                f"Create {path}", metadata=metadata
            )

        return self._finish(
            ActionType.CREATE, ActionStatus.EXECUTED,
            "File created",
            f"Created file: {path}", metadata=metadata
        )

    def read_file(self, path: str) -> OperationResult:
        """
        Stream the lines of a file to the output sink.

        Lines are emitted in order without their terminators and are also
        returned in ``OperationResult.data``.

        Args:
            path: Path to the file

        Returns:
            OperationResult; CONFLICT if the file does not exist
        """
        if not self.fs.is_file(path):
            return self._finish(
                ActionType.READ, ActionStatus.CONFLICT,
                "Cannot read! File does not exist",
                f"Read {path}", metadata={"path": path}
            )

        lines = []
        self._say("Reading file...")
        try:
            with self.fs.open_text(path, encoding=self.encoding) as f:
                for line in f:
                    line = line.rstrip("\r\n")
                    lines.append(line)
                    self.output(line)
        except (OSError, UnicodeDecodeError) as e:
            return self._finish(
                ActionType.READ, ActionStatus.FAILED,
                f"Failed to read {path}: {e}",
                f"Read {path}", data=lines, metadata={"path": path}
            )

        return self._finish(
            ActionType.READ, ActionStatus.EXECUTED,
            "Finished reading",
            f"Read file: {path}", data=lines,
            metadata={"path": path, "lines": len(lines)}
        )

    def delete_file(self, path: str, dry_run: bool = False) -> OperationResult:
        """
        Delete a file.

        Args:
            path: Path to the file
            dry_run: If True, only preview the action

        Returns:
            OperationResult; CONFLICT if the file does not exist
        """
        if not self.fs.is_file(path):
            return self._finish(
                ActionType.DELETE, ActionStatus.CONFLICT,
                "Cannot delete! File does not exist",
                f"Delete {path}", metadata={"path": path}
            )

        if dry_run:
            return self._finish(
                ActionType.DELETE, ActionStatus.DRY_RUN,
                f"DRY-RUN: Would delete {path}",
                f"Delete {path}", metadata={"path": path}, dry_run=True
            )

        self._say("File exists. Deleting file...")
        try:
            file_size = self.fs.size(path)
            self.fs.remove_file(path)
        except OSError as e:
            return self._finish(
                ActionType.DELETE, ActionStatus.FAILED,
                f"Failed to delete {path}: {e}",
                f"Delete {path}", metadata={"path": path}
            )

        return self._finish(
            ActionType.DELETE, ActionStatus.EXECUTED,
            "File deleted",
            f"Deleted file: {path}", metadata={"path": path, "size": file_size}
        )

    def _check_transfer(self, verb: str, src: str, dst: str) -> Optional[str]:
        """Return the conflict message for a copy/move, or None if allowed."""
        if not self.fs.is_file(src):
            return f"Cannot {verb}! File does not exist"
        if self.fs.exists(dst):
            return f"Cannot {verb}! Destination file already exists"
        return None

    def copy_file(self, src: str, dst: str, dry_run: bool = False) -> OperationResult:
        """
        Copy a file from source to destination.

        Args:
            src: Source file path
            dst: Destination file path
            dry_run: If True, only preview the action

        Returns:
            OperationResult; CONFLICT if src is missing or dst already exists
        """
        metadata = {"source": src, "destination": dst}

        conflict = self._check_transfer("copy", src, dst)
        if conflict:
            return self._finish(
                ActionType.COPY, ActionStatus.CONFLICT, conflict,
                f"Copy {src} to {dst}", metadata=metadata
            )

        if dry_run:
            return self._finish(
                ActionType.COPY, ActionStatus.DRY_RUN,
                f"DRY-RUN: Would copy {src} to {dst}",
                f"Copy {src} to {dst}", metadata=metadata, dry_run=True
            )

        self._say("Copying file...")
        try:
            metadata["size"] = self.fs.size(src)
            self.fs.copy_file(src, dst)
        except OSError as e:
            return self._finish(
                ActionType.COPY, ActionStatus.FAILED,
                f"Failed to copy {src} to {dst}: {e}",
                f"Copy {src} to {dst}", metadata=metadata
            )

        return self._finish(
            ActionType.COPY, ActionStatus.EXECUTED,
            "File copied",
            f"Copied {src} to {dst}", metadata=metadata
        )

    def move_file(self, src: str, dst: str, dry_run: bool = False) -> OperationResult:
        """
        Move a file from source to destination.

        Args:
            src: Source file path
            dst: Destination file path
            dry_run: If True, only preview the action

        Returns:
            OperationResult; CONFLICT if src is missing or dst already exists
        """
        metadata = {"source": src, "destination": dst}

        conflict = self._check_transfer("move", src, dst)
        if conflict:
            return self._finish(
                ActionType.MOVE, ActionStatus.CONFLICT, conflict,
                f"Move {src} to {dst}", metadata=metadata
            )

        if dry_run:
            return self._finish(
                ActionType.MOVE, ActionStatus.DRY_RUN,
                f"DRY-RUN: Would move {src} to {dst}",
                f"Move {src} to {dst}", metadata=metadata, dry_run=True
            )

        self._say("Moving file...")
        try:
            metadata["size"] = self.fs.size(src)
            self.fs.move_file(src, dst)
        except OSError as e:
            return self._finish(
                ActionType.MOVE, ActionStatus.FAILED,
                f"Failed to move {src} to {dst}: {e}",
                f"Move {src} to {dst}", metadata=metadata
            )

        return self._finish(
            ActionType.MOVE, ActionStatus.EXECUTED,
            "File moved",
            f"Moved {src} to {dst}", metadata=metadata
        )

    def make_directory(self, path: str, dry_run: bool = False) -> OperationResult:
        """
        Create a directory and any missing parents.

        Args:
            path: Directory path
            dry_run: If True, only preview the action

        Returns:
            OperationResult; CONFLICT if the directory already exists
        """
        if self.fs.is_dir(path):
            return self._finish(
                ActionType.MKDIR, ActionStatus.CONFLICT,
                "Directory already exists",
                f"Make directory {path}", metadata={"path": path}
            )

        if dry_run:
            return self._finish(
                ActionType.MKDIR, ActionStatus.DRY_RUN,
                f"DRY-RUN: Would create directory {path}",
                f"Make directory {path}", metadata={"path": path}, dry_run=True
            )

        try:
            self.fs.make_dirs(path)
        except OSError as e:
            return self._finish(
                ActionType.MKDIR, ActionStatus.FAILED,
                f"Failed to create directory {path}: {e}",
                f"Make directory {path}", metadata={"path": path}
            )

        return self._finish(
            ActionType.MKDIR, ActionStatus.EXECUTED,
            "Directory created",
            f"Created directory: {path}", metadata={"path": path}
        )
