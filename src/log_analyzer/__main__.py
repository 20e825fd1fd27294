"""Module entrypoint.

Allows:
    python -m log_analyzer app.log
"""

from __future__ import annotations

from log_analyzer.cli import main

if __name__ == "__main__":
    main()
