import os
import sys
from pathlib import Path

# Qt widgets without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

sys.path.append(str(Path(__file__).resolve().parents[1]))
