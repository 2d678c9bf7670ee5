import sys
from pathlib import Path

# Make 'src' importable so tests run without installing gridcrawl
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))
