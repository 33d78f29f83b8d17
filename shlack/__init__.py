from .client import Client
from .connection import Connection
from .session import SessionState
from .codec import DELIM, encode, parse_input, parse_reply
from .message import (
    TextData, Login, Logout, Cmd,
    JoinChannel, Whisper, ListChannels, ListUsers, Help,
    Public, WhisperReply, Server
)

__version__ = '1.0.0'
