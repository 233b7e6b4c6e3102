"""
CodeIR Backend Package
======================

Flask-based backend for the CodeIR code submission and review app.

Structure:
- routes/: API route blueprints (auth, student, instructor screens)
- services/: Supabase access, view routing, IR placeholder, dashboard stats
- config.py: Configuration management
"""

from .config import config, Config

__version__ = "1.0.0"

__all__ = ['config', 'Config']
