import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))  # noqa: E402

from graph_layouts.cli import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
