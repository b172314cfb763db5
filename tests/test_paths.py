"""Path resolver — layout, padding, ancestors, leave ranges."""
import datetime

import pytest

from scrum.paths import leave_range, parent_dirs, resolve, scrum_dir, shift


def test_resolve_zero_pads_month_and_day():
    assert resolve(datetime.date(2024, 3, 1), "alice") == "stor/scrum/2024/03/01/alice"


def test_resolve_components_match_date():
    d = datetime.date(1999, 12, 31)
    parts = resolve(d, "bob").split("/")
    assert parts == ["stor", "scrum", "1999", "12", "31", "bob"]


def test_scrum_dir_is_parent_of_resolve():
    d = datetime.date(2024, 11, 5)
    assert resolve(d, "carol").startswith(scrum_dir(d) + "/")
    assert scrum_dir(d) == "stor/scrum/2024/11/05"


@pytest.mark.parametrize("bad", ["", "   ", "a/b"])
def test_resolve_rejects_bad_usernames(bad):
    with pytest.raises(ValueError):
        resolve(datetime.date(2024, 3, 1), bad)


def test_shift_crosses_month_and_year():
    assert shift(datetime.date(2024, 2, 28), 2) == datetime.date(2024, 3, 1)
    assert shift(datetime.date(2024, 1, 1), -1) == datetime.date(2023, 12, 31)


def test_parent_dirs_root_first():
    assert parent_dirs("stor/scrum/2024/03/01/alice") == [
        "stor",
        "stor/scrum",
        "stor/scrum/2024",
        "stor/scrum/2024/03",
        "stor/scrum/2024/03/01",
    ]


def test_leave_range_is_consecutive():
    start = datetime.date(2024, 3, 30)
    assert leave_range(start, 3) == [
        datetime.date(2024, 3, 30),
        datetime.date(2024, 3, 31),
        datetime.date(2024, 4, 1),
    ]


def test_leave_range_has_at_least_one_day():
    start = datetime.date(2024, 3, 1)
    assert leave_range(start, 0) == [start]
