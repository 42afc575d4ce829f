import contextlib
import io
import re

import pytest

_CODE_RE = re.compile(r"```python\n(.*)\n```", re.S)


def _run_snippet(question: str) -> str:
    """Execute the fenced snippet of a question and return what it printed."""
    match = _CODE_RE.search(question)
    assert match, question
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        exec(match.group(1), {})
    return out.getvalue().strip()


@pytest.fixture
def run_snippet():
    return _run_snippet
