"""
Tests for the fault demonstrations.
"""

import io

import pytest
from pathlib import Path
from rich.console import Console

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from modules.fault_demos import (
    INT32_MAX,
    INT32_MIN,
    checked_add,
    wrapping_add,
    run_all,
)


class TestArithmetic:
    """Test the 32-bit helpers."""

    def test_checked_add_in_range(self):
        """Test checked addition within range."""
        assert checked_add(INT32_MAX - 1, 1) == INT32_MAX

    def test_checked_add_overflow(self):
        """Test checked addition past the maximum."""
        with pytest.raises(OverflowError):
            checked_add(INT32_MAX, 1)

    def test_checked_add_underflow(self):
        """Test checked addition below the minimum."""
        with pytest.raises(OverflowError):
            checked_add(INT32_MIN, -1)

    def test_wrapping_add(self):
        """Test unchecked addition wraps around."""
        assert wrapping_add(INT32_MAX, 1) == INT32_MIN
        assert wrapping_add(2, 3) == 5


class TestRunAll:
    """Every demonstration catches its fault."""

    @pytest.fixture
    def buffer(self):
        return io.StringIO()

    def test_reports(self, buffer):
        """Test what each demonstration caught."""
        reports = run_all(Console(file=buffer, width=200))

        assert [r.name for r in reports] == [
            "index_out_of_range", "checked_overflow", "custom_fault"
        ]
        assert [r.caught for r in reports] == ["IndexError", "OverflowError", "DemoFault"]
        assert reports[2].message == "That won't work"

    def test_output(self, buffer):
        """Test the console narration."""
        run_all(Console(file=buffer, width=200))

        output = buffer.getvalue()
        assert "Index out of range" in output
        assert "try-except finished" in output
        assert "Overflow" in output
        assert "-2147483648" in output
        assert "That won't work" in output
