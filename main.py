# main.py
import logging
import subprocess
import os
import sys

from attendance_agent.config import configure_logging

logger = logging.getLogger(__name__)


def main():
    """Run the Streamlit app"""
    configure_logging()
    app_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "frontend", "app.py")
    try:
        subprocess.run([
            "streamlit", "run",
            app_path
        ], check=True)
    except subprocess.CalledProcessError as e:
        logger.error("Error running Streamlit app: %s", e)
        sys.exit(1)

if __name__ == "__main__":
    main()
