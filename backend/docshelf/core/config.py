import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Process-owned private root; the managed directory lives directly under it
DOCSHELF_ROOT = Path(os.getenv("DOCSHELF_ROOT", str(BASE_DIR / "data")))

# Managed directory name is fixed - it is the single source of truth for the catalogue
MANAGED_DIR_NAME = "docs"
MANAGED_DIR = DOCSHELF_ROOT / MANAGED_DIR_NAME

# Public save location used by export
EXPORT_DIR = Path(os.getenv("EXPORT_DIR", str(Path.home() / "Downloads")))

# Storage backend (only the local filesystem volume ships with DocShelf)
STORAGE_TYPE = os.getenv("STORAGE_TYPE", "local")

# Share hand-off: external command that receives the file path (e.g. "xdg-open").
# Empty means the platform offers no share mechanism.
SHARE_COMMAND = os.getenv("SHARE_COMMAND", "")

# Unique-name search: numeric suffixes tried before falling back to a timestamp
MAX_NAME_ATTEMPTS = int(os.getenv("MAX_NAME_ATTEMPTS", "10000"))

# Name used when neither the picker nor the source location yields one
DEFAULT_IMPORT_NAME = "file"

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8081").split(",")
