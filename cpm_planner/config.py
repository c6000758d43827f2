
import os

from dotenv import load_dotenv

load_dotenv()

# CORS settings
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cpm_planner.db")

# Float below this (in hours) marks a task as critical
CPM_FLOAT_EPSILON = float(os.getenv("CPM_FLOAT_EPSILON", "0.001"))

# Used when rendering hour offsets as days/weeks
WORKING_HOURS_PER_DAY = int(os.getenv("WORKING_HOURS_PER_DAY", "8"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Uvicorn server settings
UVICORN_HOST = os.getenv("UVICORN_HOST", "0.0.0.0")
UVICORN_PORT = int(os.getenv("UVICORN_PORT", "8000"))
