"""
Terminal chat client for Shlack servers

Connects to a Shlack server over TCP and runs a line-based chat session:

- Colored output using blessed
- Channel divider redrawn after every message
- Slash commands (/join, /whisper, /listchannels, /listusers, /help)
- Incoming messages shown while typing

Usage:
    python -m terminal.client [config.json] [--host HOST] [--port PORT]

Type 'logout' to leave.
"""

__version__ = "1.0.0"
