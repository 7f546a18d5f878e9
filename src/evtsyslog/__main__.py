"""``python -m evtsyslog`` entry point.

The Windows service is registered with ``-m evtsyslog service`` as its
command line, so this module is also what the Service Control Manager runs.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
