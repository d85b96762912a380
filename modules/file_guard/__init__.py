"""
File guard module for GuardFS.

Provides file and directory operations that check existence before acting.
"""

from .backends import FileSystem, LocalFileSystem, MemoryFileSystem
from .guarded_ops import GuardedFileOperator, OperationResult
from .demo import run_demo

__all__ = [
    'FileSystem',
    'LocalFileSystem',
    'MemoryFileSystem',
    'GuardedFileOperator',
    'OperationResult',
    'run_demo',
]
