"""Module entrypoint.

Allows:
    python -m massif_combine -o massif.out.all massif.out.*
"""

from __future__ import annotations

from massif_combine.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
