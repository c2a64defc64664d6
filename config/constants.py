"""
Default constants for the sink pipeline.

Components take every option as an explicit constructor argument; these are
the values used when the caller does not pass one.
"""

# --- Rendering ---
DEFAULT_RENDER_WIDTH = 160

# --- Split terminal ---
DEFAULT_SPLIT_FRACTION = 2 / 3

# --- Repetition filter ---
DEFAULT_REPEAT_WINDOW_SECONDS = 2.0
REPEAT_SUMMARY_TEMPLATE = "(repeated x{count}) "

# --- Failure context ---
DEFAULT_CONTEXT_CAPACITY = 5
DEFAULT_FAILURE_MARKER = "Test Failed"

# --- Library identity (own loggers are never fed back into a sink) ---
LIBRARY_LOGGER_PREFIX = "log_sinks"
