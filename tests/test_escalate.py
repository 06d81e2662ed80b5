"""Tests for roost._internal.escalate — warnings as hard failures."""

import warnings

import pytest

from roost._internal.escalate import escalate_warnings
from roost.errors import WarningError


class TestEscalateWarnings:
    def test_warning_raises(self) -> None:
        with pytest.raises(WarningError) as exc_info, escalate_warnings():
            warnings.warn("careful", UserWarning, stacklevel=1)
        assert exc_info.value.category is UserWarning
        assert exc_info.value.message == "careful"
        assert exc_info.value.filename == __file__

    def test_repeated_warning_raises_each_time(self) -> None:
        for _ in range(2):
            with pytest.raises(WarningError), escalate_warnings():
                warnings.warn("again", RuntimeWarning, stacklevel=1)

    def test_disabled(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with escalate_warnings(enabled=False):
                warnings.warn("logged only", UserWarning, stacklevel=1)
        assert [str(w.message) for w in caught] == ["logged only"]

    def test_state_restored(self) -> None:
        original = warnings.showwarning
        with escalate_warnings():
            pass
        assert warnings.showwarning is original

    def test_block_without_warnings(self) -> None:
        with escalate_warnings():
            value = 1 + 1
        assert value == 2
