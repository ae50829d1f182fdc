from __future__ import annotations

from debtsync.ui.cli import run

if __name__ == "__main__":
    run()
