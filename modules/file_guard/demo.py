"""
Scripted walkthrough of the guarded file operations.

Replays a fixed sequence inside a working directory so every outcome class
(created, conflict, copied, deleted, missing, moved) shows up at least once.
"""

import os
from typing import List

from .guarded_ops import GuardedFileOperator, OperationResult


DEMO_CONTENT = """This is a test file.
It's not very interesting.
But it does have multiple lines!
I made this in Python."""


def run_demo(operator: GuardedFileOperator, workdir: str = ".") -> List[OperationResult]:
    """
    Run the walkthrough against workdir.

    On a clean directory the second create and the final read report
    conflicts; on a repeated run the move conflicts too, since temp/moved.txt
    is left behind.

    Args:
        operator: Operator to run the steps through
        workdir: Directory the demo files are created in

    Returns:
        The result of every step, in order
    """
    source = os.path.join(workdir, "test.txt")
    copy_target = os.path.join(workdir, "default.txt")
    folder = os.path.join(workdir, "temp")
    moved = os.path.join(folder, "moved.txt")

    steps = [
        lambda: operator.create_file(source, DEMO_CONTENT),
        lambda: operator.create_file(source, "This is a new file"),
        lambda: operator.read_file(source),
        lambda: operator.copy_file(source, copy_target),
        lambda: operator.read_file(copy_target),
        lambda: operator.delete_file(copy_target),
        lambda: operator.read_file(copy_target),
        lambda: operator.make_directory(folder),
        lambda: operator.move_file(source, moved),
        lambda: operator.read_file(moved),
        lambda: operator.read_file(source),
    ]

    results = []
    for step in steps:
        results.append(step())
        operator.console.print()
    return results
