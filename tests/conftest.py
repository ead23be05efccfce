import io
import os

import pytest

from lumen.lumen_session import Session

# Collect coverage from CLI subprocesses when the run asks for it
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture  # type: ignore[misc]
def err() -> io.StringIO:
    return io.StringIO()


@pytest.fixture  # type: ignore[misc]
def session(out: io.StringIO, err: io.StringIO) -> Session:
    return Session(out=out, err=err)
