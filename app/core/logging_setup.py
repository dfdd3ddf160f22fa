import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level_name: str = "INFO") -> None:
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    # Streamlit re-executes the script on every interaction; keep a single handler.
    for h in list(root.handlers):
        if getattr(h, "_chat_app_handler", False):
            root.removeHandler(h)
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(logging.Formatter(LOG_FORMAT))
    sh._chat_app_handler = True
    root.addHandler(sh)

    logging.captureWarnings(True)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)
    logging.getLogger("core").setLevel(level)
