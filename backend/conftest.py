# Ensure '<repo>/backend' is on sys.path so 'import app.*' works
# whether pytest is started from the repo root or from backend/.
from pathlib import Path
import sys

_BACKEND_ROOT = Path(__file__).resolve().parent  # <repo>/backend
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))
