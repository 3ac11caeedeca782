import logging
import os
import sys

import pytest

# Ensure tests can import the top-level calculator modules when pytest changes CWD.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def evaluation_trace(caplog):
    """Capture the evaluator's DEBUG trace; returns a getter for its messages."""
    caplog.set_level(logging.DEBUG, logger="evaluator")

    def messages():
        return [r.getMessage() for r in caplog.records if r.name == "evaluator"]

    return messages
