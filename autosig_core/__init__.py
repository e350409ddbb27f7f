"""
autosig core package
====================
Automatic default-signature insertion for mail compose events.

Provides:
- Signature resolution with a two-backend expiring cache (SQLite or memory)
- Credential resolution (session, delegated token, stored action credential)
- Size-limited insertion with inline image attachments
- Rotating host notifications
"""

__version__ = "0.1.0"
