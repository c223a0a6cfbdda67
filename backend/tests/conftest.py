import os
import sys

# Ensure the scorekeeper package is importable without an editable install.
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
