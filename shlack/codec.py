#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Wire encoding for client frames and parsing of keyboard input and
server replies.
"""
import logging

from .message import (
    TextData, Login, Logout, Cmd,
    JoinChannel, Whisper, ListChannels, ListUsers, Help,
    Public, WhisperReply, Server
)


logger = logging.getLogger(__name__)

# Field separator inside a frame. User text must not contain it.
DELIM = '|&|'

SINGLE_COMMANDS = {
    'listchannels': ListChannels,
    'listusers': ListUsers,
    'help': Help
}

REPLY_TAGS = {
    'W': WhisperReply,
    'P': Public,
    'S': Server
}


def encode_command(command):
    """Encode a command.

    Parameters
    ----------
    command : `JoinChannel`, `Whisper`, `ListChannels`, `ListUsers` or `Help`

    Returns
    -------
    `str`
    """
    if isinstance(command, JoinChannel):
        return 'Join' + DELIM + command.name
    if isinstance(command, Whisper):
        return 'Whisper' + DELIM + command.recipient + DELIM + command.body
    if isinstance(command, ListChannels):
        return 'ListChannels'
    if isinstance(command, ListUsers):
        return 'ListUsers'
    if isinstance(command, Help):
        return 'Help'
    raise TypeError('unknown command: %r' % (command,))


def encode(msg):
    """Encode a message as a frame body.

    The line terminator is not included, the connection adds it.

    Parameters
    ----------
    msg : `TextData`, `Login`, `Logout` or `Cmd`

    Returns
    -------
    `str`

    Examples
    --------
    >>> encode(TextData('pizza'))
    'Message|&|pizza'
    >>> encode(Cmd(Whisper('alex', 'hey dad')))
    'Whisper|&|alex|&|hey dad'
    """
    if isinstance(msg, TextData):
        return 'Message' + DELIM + msg.text
    if isinstance(msg, Login):
        return 'Login' + DELIM + msg.username
    if isinstance(msg, Logout):
        return 'Logout'
    if isinstance(msg, Cmd):
        return encode_command(msg.command)
    raise TypeError('unknown message: %r' % (msg,))


def parse_input(line):
    """Parse a line typed by the user.

    Parameters
    ----------
    line : `str`
        Input line without the trailing newline.

    Returns
    -------
    `None` or message
        `None` if the line should not be sent.
    """
    if line == '':
        return None
    if line == 'logout':
        return Logout()

    parts = line.split(' ')
    head, rest = parts[0], parts[1:]

    # /whisper takes any number of words after the recipient
    if head == '/whisper' and len(rest) >= 2:
        return Cmd(Whisper(rest[0], ' '.join(rest[1:])))

    if not rest:
        if head.startswith('/'):
            command = SINGLE_COMMANDS.get(head[1:])
            if command is None:
                logger.debug('unknown command: %s', head)
                return None
            return Cmd(command())
        return TextData(head)

    if not head.startswith('/'):
        return TextData(line)
    if head == '/join':
        return Cmd(JoinChannel(''.join(rest)))

    logger.debug('rejected input: %s', line)
    return None


def parse_reply(line):
    """Parse a line received from the server.

    Lines that are not exactly ``tag DELIM body`` are shown as public
    text as they are.

    Parameters
    ----------
    line : `str`

    Returns
    -------
    `Public`, `WhisperReply` or `Server`
    """
    parts = line.split(DELIM)
    if len(parts) != 2:
        return Public(line)
    tag, body = parts
    return REPLY_TAGS.get(tag, Public)(body)
