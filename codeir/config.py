"""
Configuration management for CodeIR backend.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# User data
HOME_DIR = Path.home()
AUDIT_LOG_FILE = os.getenv("CODEIR_AUDIT_LOG", str(HOME_DIR / ".codeir_audit.log"))

# Supabase project (auth + tables). The JWT secret is read lazily by auth.py.
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

# Server configuration
HOST = "0.0.0.0"
PORT = int(os.getenv("CODEIR_PORT", "3000"))
DEBUG = os.getenv("CODEIR_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("CODEIR_LOG_LEVEL", "INFO").upper()

# Frontend origins allowed to call the API
CORS_ORIGINS = [o.strip() for o in os.getenv("CODEIR_CORS_ORIGINS", "*").split(",") if o.strip()]


class Config:
    """Application configuration class."""

    def __init__(self):
        self.supabase_url = SUPABASE_URL
        self.supabase_anon_key = SUPABASE_ANON_KEY
        self.audit_log_file = AUDIT_LOG_FILE
        self.host = HOST
        self.port = PORT
        self.debug = DEBUG
        self.log_level = LOG_LEVEL

    def to_dict(self):
        return {
            "supabase_url": self.supabase_url,
            "supabase_configured": bool(self.supabase_url and self.supabase_anon_key),
            "audit_log_file": self.audit_log_file,
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global config instance
config = Config()
