"""
CodeIR Services
===============

Business logic services for the CodeIR application.

Services:
- supabase_client: Supabase SDK clients (anon and per-user)
- session_router: Session/role view state machine
- ir_service: Placeholder IR generation and code translation
- dashboard_service: Streaks, heatmap buckets and review counters
"""

# Services are imported directly when needed to avoid circular imports
# Example: from codeir.services.dashboard_service import calculate_streak

__all__ = [
    'supabase_client',
    'session_router',
    'ir_service',
    'dashboard_service',
]
