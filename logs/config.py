"""
Logging Configuration

Where the service writes its logs and how each stream is formatted.

Streams:
- console:  every record at LOG_LEVEL and above
- service:  INFO and above, one rotating file (upload / chat / LLM call flow)
- errors:   ERROR and above, one rotating file
- metrics:  one JSON object per LLM call, kept off the console when file logging is on
"""
import os
from pathlib import Path

# Rotating files go here when file logging is enabled
LOG_OUTPUT_DIR = os.getenv("LOG_OUTPUT_DIR", str(Path(__file__).parent / "output"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Rotation: 5 MB per file, 3 backups per stream
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# Prompts and replies are logged truncated to this many characters
LOG_PREVIEW_LENGTH = int(os.getenv("LOG_PREVIEW_LENGTH", "200"))

# =========================
# Formats
# =========================

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-7s | %(request_id)-36s | %(message)s"

LOG_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-7s | %(request_id)-36s | %(user_id)-16s | "
    "%(name)s:%(lineno)d | %(message)s"
)

LOG_METRICS_FORMAT = "%(message)s"

# =========================
# File Names
# =========================

LOG_FILE_SERVICE = os.getenv("LOG_FILE_SERVICE", "docqa_service.log")
LOG_FILE_ERRORS = os.getenv("LOG_FILE_ERRORS", "docqa_errors.log")
LOG_FILE_METRICS = os.getenv("LOG_FILE_METRICS", "docqa_llm_metrics.jsonl")
