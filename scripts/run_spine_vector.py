#!/usr/bin/env python3
"""Spine vector runner.

Usage:
    python scripts/run_spine_vector.py scripts/user_config.py
    python scripts/run_spine_vector.py scripts/user_config.py --weight-kg 75
    python scripts/run_spine_vector.py scripts/user_config.py -v

Note: User config in scripts/user_config.py, expert defaults in
spinevec/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from spinevec.cli.run_spine import main


if __name__ == "__main__":
    sys.exit(main())
