# cut_planner/__main__.py
# Package entrypoint so you can run:
#   python -m cut_planner --help
#
# Examples:
#   python -m cut_planner --example mini_garden
#   python -m cut_planner --spec job.json --solver exact --out out/ --png plan.png

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
