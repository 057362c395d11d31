"""
Pytest configuration for the sum-check tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repository root, so parent is the root)
repo_dir = Path(__file__).parent.parent
if str(repo_dir) not in sys.path:
    sys.path.insert(0, str(repo_dir))

from tests.instances import build_e2e_poly  # noqa: E402
from sumcheck.protocol.virtual_poly import VirtualPolynomial  # noqa: E402


@pytest.fixture
def e2e_poly() -> VirtualPolynomial:
    """f = A*B*E - C*E over two variables with a known claim."""
    return build_e2e_poly()
