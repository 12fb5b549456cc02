"""mac-setup: provision a fresh macOS workstation.

Core design goals:
- Ordered steps, each with its own precondition and failure policy
- Idempotent by re-run (cheap existence checks only)
- Fatal failures stop the run with a remedy; optional inputs only warn
- Centralized logging
"""

__all__ = []
