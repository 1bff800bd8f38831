import os

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

LINKED_GRAPH = "nodes:\n  - name: A\n  - name: B\nlinks:\n  - from: A\n    to: B"

NESTED_GRAPH = """nodes:
  - name: A
  - name: sub
    nodes:
      - name: inner
      - plain
    links:
      - from: inner:out
        to: A:in
links:
  - from: A:x
    to: ghost:y
"""


@pytest.fixture
def linked_graph_text() -> str:
    return LINKED_GRAPH


@pytest.fixture
def nested_graph_text() -> str:
    return NESTED_GRAPH
