"""
Passcryption vault core
Copyright (c) 2025

THREAT MODEL:
Credentials are encrypted at rest with a key derived from this machine's host
name and user name. The vault is protected against a copy of the file being
read elsewhere, not against other programs running as the same user on the
same machine, which can rebuild the key.
"""

__version__ = "1.0.0"
