"""
Reddyt - Content Pipeline Administration Backend

Tracks per-profile runs through the video production stages and gates
every mutating operation behind a single administrator identity.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- All communication through defined interfaces

Modules:
- auth: Admin authentication and session tokens
- runs: Run lifecycle and persistence
- storage: Data persistence abstraction
- api: REST API models
"""

__version__ = "1.0.0"
