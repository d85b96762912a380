"""
Fault demonstrations for GuardFS.

Where the file operations avoid errors by checking first, these trigger a
fault on purpose, catch it where it happens and report it. Nothing escapes.
"""

from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console

from core.errors import DemoFault


INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


@dataclass
class FaultReport:
    """What a demonstration caught."""
    name: str
    caught: str
    message: str


def checked_add(a: int, b: int) -> int:
    """
    Add two 32-bit signed integers.

    Raises:
        OverflowError: If the sum falls outside the int32 range
    """
    result = a + b
    if result < INT32_MIN or result > INT32_MAX:
        raise OverflowError(f"{a} + {b} overflows a 32-bit signed integer")
    return result


def wrapping_add(a: int, b: int) -> int:
    """Add two 32-bit signed integers, wrapping around on overflow."""
    return (a + b + 2**31) % 2**32 - 2**31


def index_out_of_range(console: Console) -> FaultReport:
    numbers = [1, 2, 3]
    try:
        console.print(numbers[10])
    except IndexError as e:
        console.print("Index out of range", style="yellow")
        console.print(repr(e), markup=False)
        return FaultReport("index_out_of_range", type(e).__name__, str(e))
    finally:
        console.print("try-except finished")
    return FaultReport("index_out_of_range", "", "")


def checked_overflow(console: Console) -> FaultReport:
    x = INT32_MAX
    try:
        x = checked_add(x, 1)
        console.print(x)
    except OverflowError as e:
        console.print("Overflow", style="yellow")
        console.print(repr(e), markup=False)
        console.print(f"Unchecked, it would wrap to {wrapping_add(x, 1)}")
        return FaultReport("checked_overflow", type(e).__name__, str(e))
    return FaultReport("checked_overflow", "", str(x))


def custom_fault(console: Console) -> FaultReport:
    try:
        raise DemoFault("That won't work")
    except DemoFault as e:
        console.print(str(e), style="yellow", markup=False)
        return FaultReport("custom_fault", type(e).__name__, str(e))


def run_all(console: Optional[Console] = None) -> List[FaultReport]:
    """Run every fault demonstration and return what each one caught."""
    console = console or Console()
    reports = []
    for demo in (index_out_of_range, checked_overflow, custom_fault):
        reports.append(demo(console))
        console.print()
    return reports
