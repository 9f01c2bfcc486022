#!/usr/bin/env python3
"""Query senator attendance without installing the package.

Usage::

    python scripts/asistencia.py sala --senador-id 905 --nombre "Allamand Z., Andrés" --periodo 2015
    python scripts/asistencia.py comisiones --senador-id 905 --nombre "Allamand Z., Andrés" \\
        --fecha 2015-06-01 --json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project is importable
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from senado_asistencia.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
