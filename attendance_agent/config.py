# attendance_agent/config.py
import logging
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))
LLM_TIMEOUT_S = float(os.getenv("LLM_TIMEOUT_S", "60"))

# Attendance lookup (simulated network latency)
LOOKUP_LATENCY_S = float(os.getenv("LOOKUP_LATENCY_S", "0.5"))

# Chat history persistence: "file" or "mongo"
HISTORY_BACKEND = os.getenv("HISTORY_BACKEND", "file").lower()
HISTORY_DIR = os.getenv("HISTORY_DIR", os.path.join(os.path.expanduser("~"), ".ims_attendance_agent"))
HISTORY_SLOT = os.getenv("HISTORY_SLOT", "chatHistory")

# MongoDB Configuration
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/")
MONGODB_DB = os.getenv("MONGODB_DB", "attendance_agent")

# System Configuration
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging():
    """Apply the application log format once per process"""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
