"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from backend.app.store import history_store


@pytest.fixture(autouse=True)
def clean_history():
    """Start every test with an empty history."""
    history_store.clear()
    yield
    history_store.clear()


@pytest.fixture
def buggy_js_code():
    """JavaScript snippet with a mix of AI-generated mistakes."""
    return '''// Buggy JavaScript Example
var oldWay = "bad";
const users = [];

if (users.isEmpty()) {
    console.log("No users");
}

async function getData() {
    const response = fetch('/api/data');
    const data = response.json();
}

eval(userInput);
'''


@pytest.fixture
def buggy_python_code():
    """Python snippet with mutable defaults, bare except and deprecated calls."""
    return '''import time

def process(items=[]):
    items.append(1)
    start = time.clock()
    try:
        run(items)
    except:
        pass
'''


@pytest.fixture
def clean_code():
    """Snippet that no rule should flag."""
    return '''const total = items.length;
const names = items.map((item) => item.name);
'''


@pytest.fixture
def noisy_js_code():
    """More than twenty findings across all severities."""
    lines = []
    for i in range(8):
        lines.append(f"eval(input{i});")
        lines.append(f"var value{i} = {i};")
        lines.append(f"if (value{i} == {i}) {{}}")
    return "\n".join(lines)
