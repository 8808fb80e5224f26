"""Test configuration for ensuring ``party_bot`` imports without installing."""

import os
import sys

# Put the repository root on ``sys.path`` so ``import party_bot`` works when
# pytest is launched from another directory.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)
