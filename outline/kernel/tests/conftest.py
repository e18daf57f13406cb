"""
Outline kernel test configuration.

Shared row factory and the small outline most navigation tests start from:

  ./root          (row1)
    ./root/child  (row2)
    ./root/child2 (row3)
  ./foo           (row4)
"""

import uuid

import pytest

from outline.kernel.events import log_add, log_add_below, log_add_right, make_row
from outline.kernel.reducer import clear_replay_cache
from outline.kernel.types import EMPTY_LOG


def new_row(label):
    """Row with a fresh opaque id, the way an editor would mint one."""
    return make_row(uuid.uuid4().hex[:8], label)


@pytest.fixture(autouse=True)
def _fresh_replay_cache():
    clear_replay_cache()
    yield
    clear_replay_cache()


@pytest.fixture
def rows():
    return {
        "row1": new_row("./root"),
        "row2": new_row("./root/child"),
        "row3": new_row("./root/child2"),
        "row4": new_row("./foo"),
    }


@pytest.fixture
def outline_log(rows):
    log = log_add(EMPTY_LOG, rows["row1"])
    log = log_add_below(log, rows["row1"].id, rows["row4"])
    log = log_add_right(log, rows["row1"].id, rows["row2"])
    log = log_add_below(log, rows["row2"].id, rows["row3"])
    return log
