"""
Shared fixtures for decision tree tests.
"""

import pytest

from dtree.core.examples import example_tree
from dtree.core.tree import Tree

WEEKEND_YAML = """\
tree:
  label: Weekend
  children:
    - type: chance
      label: Go
      value: -5
      children:
        - {type: terminal, label: Rain, value: -20, probability: 0.2}
        - type: decision
          label: Sunny
          value: 20
          probability: 0.8
          children:
            - {label: Have lunch, value: 5}
            - {label: Have dinner, value: 10}
    - {type: terminal, label: Not go, value: 0}
"""

INVALID_YAML = """\
tree:
  children:
    - type: chance
      label: Coin
      children:
        - {label: Heads, value: 1, probability: 0.5}
        - {label: Tails, value: -1, probability: 0.4}
"""


@pytest.fixture
def tree() -> Tree:
    """The go-out-or-not example tree (ids 0-6)."""
    return example_tree()


@pytest.fixture
def empty_tree() -> Tree:
    return Tree()


@pytest.fixture
def weekend_file(tmp_path):
    """YAML definition of the example tree."""
    path = tmp_path / "weekend.yaml"
    path.write_text(WEEKEND_YAML, encoding="utf-8")
    return str(path)


@pytest.fixture
def invalid_file(tmp_path):
    """YAML definition whose chance node probabilities sum to 0.9."""
    path = tmp_path / "coin.yaml"
    path.write_text(INVALID_YAML, encoding="utf-8")
    return str(path)
