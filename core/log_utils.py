#!/usr/bin/env python3
"""
core/log_utils.py: Logging setup shared by the pdfmd tool and library.
This module contains:
- setup_logging: Installs console/file handlers and per-topic debug levels.
- set_log_context: Tags every later console/file line with a short context
  (the extraction mode).
- RichLogFormatter: Aligned, optionally colored, one-prefix-per-line output.
"""

import logging

PROJECT_TOPICS = {
    "pdfmd": {"collect", "layout", "structure", "render", "source", "api", "config"},
}


def setup_logging(
    project_name: str,
    level=logging.INFO,
    color_logs=False,
    debug_topics=None,
    log_file: str = None,
) -> set:
    """
    Replaces the root handlers and returns the set of topics put at DEBUG.
    Topics are matched by prefix, so 'struct' selects 'structure'.
    """
    root_logger = logging.getLogger()
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)
        h.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(RichLogFormatter(use_color=color_logs))
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
            file_handler.setFormatter(RichLogFormatter())
            root_logger.addHandler(file_handler)
            logging.getLogger(project_name).info("Logging to file: %s", log_file)
        except OSError as e:
            logging.getLogger(project_name).error(
                "Could not open log file %s: %s", log_file, e
            )

    logging.getLogger("pdfminer").setLevel(logging.WARNING)

    if not debug_topics:
        return set()
    valid_topics = PROJECT_TOPICS.get(project_name, set())
    requested = [t.strip() for t in debug_topics.split(",") if t.strip()]
    if "all" in requested:
        enabled = set(valid_topics)
    else:
        enabled = {t for t in valid_topics if any(t.startswith(r) for r in requested)}
    for topic in enabled:
        logging.getLogger(f"{project_name}.{topic}").setLevel(logging.DEBUG)
    return enabled


def set_log_context(context: str):
    """Sets the bracketed context shown by every installed RichLogFormatter."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler.formatter, RichLogFormatter):
            handler.formatter.context = context


# --- CUSTOM LOGGING FORMATTER ---
class RichLogFormatter(logging.Formatter):
    """Prefixes each line as `LEVEL:topic[context]: `, the topic being the
    logger name after the project prefix.
    Args:
        use_color (bool): If True, ANSI color codes are used. Defaults to False.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[38;5;252m",  # Light Grey
        logging.INFO: "\033[38;5;111m",  # Pastel Blue
        logging.WARNING: "\033[38;5;229m",  # Pale Yellow
        logging.ERROR: "\033[38;5;210m",  # Soft Red
        logging.CRITICAL: "\033[38;5;217m",  # Light Magenta
    }

    def __init__(self, use_color=False, context=""):
        super().__init__()
        self.use_color = use_color
        self.context = context

    def _paint(self, text, code):
        return f"{code}{text}\033[0m" if self.use_color else text

    def format(self, record):
        name_parts = record.name.split(".")
        topic = name_parts[1] if len(name_parts) > 1 else record.name
        prefix = (
            self._paint(f"{record.levelname[:5]:<5}", self.LEVEL_COLORS.get(record.levelno, ""))
            + ":"
            + self._paint(f"{topic[:6]:<6}", "\033[1m")
            + (f"[{self.context}]" if self.context else "")
            + ": "
        )
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return "\n".join(prefix + line for line in message.split("\n"))
