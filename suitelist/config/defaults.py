"""Listing defaults, overridable through the environment."""

import os
import sys

# ===== Listing Configuration =====
# Per-suite listing budget in milliseconds (0 disables the timeout) - guardrailed
SUITELIST_LIST_TIMEOUT_MS = min(
    600_000, max(0, int(os.getenv("SUITELIST_LIST_TIMEOUT_MS", "2000")))
)
LIST_TIMEOUT_MS = SUITELIST_LIST_TIMEOUT_MS  # Alias

# How long to wait for a killed worker to be reaped - guardrailed
SUITELIST_REAP_TIMEOUT_S = min(60.0, max(0.1, float(os.getenv("SUITELIST_REAP_TIMEOUT_S", "5"))))
REAP_TIMEOUT_S = SUITELIST_REAP_TIMEOUT_S  # Alias

# How long to keep reading worker output after the worker exited - guardrailed
SUITELIST_OUTPUT_GRACE_S = min(
    60.0, max(0.05, float(os.getenv("SUITELIST_OUTPUT_GRACE_S", "1")))
)
OUTPUT_GRACE_S = SUITELIST_OUTPUT_GRACE_S  # Alias

# ===== Worker Configuration =====
# Interpreter used to run workers
PYTHON_EXECUTABLE = os.getenv("SUITELIST_PYTHON") or sys.executable

WORKER_MODULE = "suitelist.worker"
DEFAULT_INTERFACE = "suitelist.interfaces.bdd"

# Run name given to suite files loaded by the bdd interface
SUITE_RUN_NAME = "__suitelist__"
