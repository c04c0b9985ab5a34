# --- roomgraph_lib/log_utils.py ---
import logging

# Define the valid logging topics for the roomgraph project.
PROJECT_TOPICS = {
    "roomgraph": {
        "main",
        "config",
        "layers",
        "label",
        "segment",
        "graph",
        "persist",
        "render",
        "session",
    }
}


# 256-colour ANSI codes per level; the console prefix is "LEVEL:topic   : ".
LEVEL_COLORS = {
    logging.DEBUG: "\033[38;5;252m",
    logging.INFO: "\033[38;5;111m",
    logging.WARNING: "\033[38;5;229m",
    logging.ERROR: "\033[38;5;210m",
    logging.CRITICAL: "\033[38;5;217m",
}
BOLD, RESET = "\033[1m", "\033[0m"


class RichLogFormatter(logging.Formatter):
    """Prefixes every line of a record with its level and roomgraph topic."""

    def __init__(self, use_color=False):
        super().__init__()
        self.use_color = use_color

    def _prefix(self, record) -> str:
        level = f"{record.levelname[:5]:<5}"
        topic = f"{record.name.rsplit('.', 1)[-1][:8]:<8}"
        if not self.use_color:
            return f"{level}:{topic}: "
        color = LEVEL_COLORS.get(record.levelno, RESET)
        return f"{color}{level}{RESET}:{BOLD}{topic}{RESET}: "

    def format(self, record):
        text = super().format(record)
        if record.__dict__.get("raw"):
            return text
        prefix = self._prefix(record)
        return "\n".join(prefix + line for line in text.split("\n"))


def resolve_topics(debug_topics):
    """Expands a comma-separated topic list (prefixes allowed) to full topic names."""
    user_topics = [t.strip() for t in debug_topics.split(",") if t.strip()]
    valid_topics = PROJECT_TOPICS.get("roomgraph", set())
    if "all" in user_topics:
        return set(valid_topics)
    return {full for u in user_topics for full in valid_topics if full.startswith(u)}


def setup_logging(level, color_logs=False, debug_topics=None, log_file=None):
    """Configures logging for the application."""
    root_logger = logging.getLogger("roomgraph")
    if root_logger.hasHandlers():
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
            file_handler.setFormatter(RichLogFormatter(use_color=False))
            root_logger.addHandler(file_handler)
            logging.getLogger("roomgraph.main").info("Logging to file: %s", log_file)
        except IOError as e:
            root_logger.error("Could not open log file %s: %s", log_file, e)

    if debug_topics:
        for topic in resolve_topics(debug_topics):
            logging.getLogger(f"roomgraph.{topic}").setLevel(logging.DEBUG)
