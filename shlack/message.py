#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Chat messages sent to the server and replies received from it."""
from dataclasses import dataclass


# Commands

@dataclass(frozen=True)
class JoinChannel:
    name: str


@dataclass(frozen=True)
class Whisper:
    recipient: str
    body: str


@dataclass(frozen=True)
class ListChannels:
    pass


@dataclass(frozen=True)
class ListUsers:
    pass


@dataclass(frozen=True)
class Help:
    pass


# Messages

@dataclass(frozen=True)
class TextData:
    text: str


@dataclass(frozen=True)
class Login:
    username: str


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class Cmd:
    command: object


# Replies

@dataclass(frozen=True)
class Public:
    text: str


@dataclass(frozen=True)
class WhisperReply:
    text: str


@dataclass(frozen=True)
class Server:
    text: str
