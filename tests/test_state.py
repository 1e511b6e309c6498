"""Tests for the work state machine."""

from datetime import UTC, datetime

import pytest

from worktime.errors import CorruptionError, InvalidTransitionError
from worktime.state import (
    WorkState,
    end_work,
    get_running_work,
    get_work_state,
    start_work,
)
from worktime.workfile import Workfile

T1 = "2024-09-23T08:00:00.000Z"
T2 = "2024-09-23T12:00:00.000Z"
T3 = "2024-09-23T13:00:00.000Z"


class TestGetRunningWork:
    """Tests for get_running_work."""

    def test_running(self) -> None:
        content = f"start {T1}\nend   {T2}\nstart {T3}"
        assert get_running_work(content) == datetime(2024, 9, 23, 13, 0, tzinfo=UTC)

    def test_not_running(self) -> None:
        assert get_running_work(f"start {T1}\nend   {T2}") is None

    def test_empty_content(self) -> None:
        assert get_running_work("") is None
        assert get_running_work("\n\n") is None

    def test_trailing_blank_lines_are_ignored(self) -> None:
        assert get_running_work(f"start {T1}\n\n") == datetime(2024, 9, 23, 8, 0, tzinfo=UTC)

    def test_garbage_is_corruption(self) -> None:
        with pytest.raises(CorruptionError) as exc_info:
            get_running_work("garbage")
        assert exc_info.value.content == "garbage"
        assert "garbage" in str(exc_info.value)

    def test_unparsable_start_is_corruption(self) -> None:
        content = f"start {T1}\nend   {T2}\nstart yesterday"
        with pytest.raises(CorruptionError) as exc_info:
            get_running_work(content)
        assert exc_info.value.content == content


class TestWorkState:
    """Tests for deriving the state."""

    def test_fresh_workfile_is_idle(self) -> None:
        assert get_work_state("") is WorkState.IDLE

    def test_unmatched_start_is_running(self) -> None:
        assert get_work_state(f"start {T1}\n") is WorkState.RUNNING


class TestTransitions:
    """Tests for start_work and end_work."""

    def test_start_on_new_workfile(self, workfile_path) -> None:
        now = datetime(2024, 9, 23, 9, 35, tzinfo=UTC)
        event = start_work(Workfile(workfile_path), now)

        assert event.timestamp == now
        assert workfile_path.read_text() == "start 2024-09-23T09:35:00.000Z\n"

    def test_start_while_running_is_rejected(self, workfile_path, make_workfile) -> None:
        content = f"start {T1}\n"
        workfile = make_workfile(content)

        with pytest.raises(InvalidTransitionError, match="already running"):
            start_work(workfile, datetime(2024, 9, 23, 9, 0, tzinfo=UTC))
        assert workfile_path.read_text() == content

    def test_end_while_running(self, workfile_path, make_workfile) -> None:
        workfile = make_workfile(f"start {T1}\n")

        end_work(workfile, datetime(2024, 9, 23, 12, 0, tzinfo=UTC))

        assert workfile_path.read_text() == f"start {T1}\nend   {T2}\n"

    def test_end_while_idle_is_rejected(self, workfile_path, make_workfile) -> None:
        content = f"start {T1}\nend   {T2}\n"
        workfile = make_workfile(content)

        with pytest.raises(InvalidTransitionError, match="No work running"):
            end_work(workfile, datetime(2024, 9, 23, 13, 0, tzinfo=UTC))
        assert workfile_path.read_text() == content

    def test_end_on_empty_workfile_is_rejected(self, workfile_path, make_workfile) -> None:
        workfile = make_workfile("")
        with pytest.raises(InvalidTransitionError):
            end_work(workfile)
        assert workfile_path.read_text() == ""

    def test_corrupted_workfile_blocks_start(self, workfile_path, make_workfile) -> None:
        workfile = make_workfile("oops\n")
        with pytest.raises(CorruptionError):
            start_work(workfile)
        assert workfile_path.read_text() == "oops\n"
