"""Edge camera host bootstrap (Python-first, sequential).

Core design goals:
- One fixed, ordered list of provisioning steps
- Continue past failures unless fail-fast is requested
- Package lists and toolchain settings live in a YAML manifest
- Centralized logging of every command
"""

__all__ = []
