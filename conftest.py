
# Root conftest: pin log output and console noise before any project import
import os
import tempfile

os.environ.setdefault("JITO_SWAP_LOG_DIR", os.path.join(tempfile.gettempdir(), "jito_swap_test_logs"))
os.environ.setdefault("SILENT_MODE", "true")
