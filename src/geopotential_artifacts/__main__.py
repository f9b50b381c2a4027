"""Allow running the generator with ``python -m geopotential_artifacts``."""

from __future__ import annotations

# Local Imports
from . import main

if __name__ == "__main__":
    main()
