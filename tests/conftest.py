import os
import sys
from pathlib import Path

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
for path in (PROJECT_ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Deterministic API tests: no rate limiting, placeholder model credential.
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ.setdefault("DEEPSEEK_API_KEY", "test-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")
