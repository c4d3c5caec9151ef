import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

# Keep test runs from writing log files into the working tree
os.environ.setdefault("FLIGHT_STATS_LOG_DIR", tempfile.mkdtemp(prefix="flight_stats_logs_"))
