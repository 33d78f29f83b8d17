#!/usr/bin/env python3
"""Terminal output and keyboard input for the chat client.

Everything the client shows goes through `Console`. Each public method
builds the complete text for one event and writes it with a single
write and flush, so output from the inbound and outbound loops never
interleaves mid-line.

Screen layout, bottom of the terminal:

    lisa: hi all               <- echo / replies scroll up
    [lobby]------------------  <- divider
    _                          <- input line
"""

import sys
import asyncio
import logging
import threading

from blessed import Terminal

from shlack.message import Public, WhisperReply, Server


BANNER = [
    "          ,▄▄,                 ▄▄        ▄▄  ▄▄▄               ▄▄",
    "    ,▄█▓▓▓▓▓▓▓▓▓▄              ▓▓        ▓▓    ▓▓              ▓▓ ",
    "   ▓▌,  ▀▓▓▓▓▓▓▓▓▌     ▄▄▓▓▄▄  ▓▓▄▄▓▓▄   ▓▓    ▐▓▓     ,▄▓▓▓▄▄ ▓▓   ▄▓▄",
    "  |▓▓▓▓▓   ▓▓▓▓▓▓▓▄   ▐▓▓   ▀  ▓▓▀   ▓▓  ▓▓    ▓▓▓▌   ▓▓▓▀  ▀  ▓▓▄▄▓▓▀",
    "  ▐▓▓▓▓▓▌ ▄  ▀▓▓▓▓▓    ▀█▓▓▓▄  ▓▓    ▓▓  ▓▓   ▓▓▀▀▓▄  ▓▓       ▓▓▓▓▓▌",
    "   ▓▓▓▓▓▌ |▓▄   ▓▓▓    ▄  ▓▓▓  ▓▓    ▓▓  ▓▓  ▓▓▌  ▓▓▄ ▀▓▓▄__▄, ▓▓▌ ▀▓▓▄",
    "    ▓▓▓▓▌ ▐▓▓▓▓▓▓▓`    ▀▀▀▀▀▀  ▀▀    ▀▀  ▀▀  ▀▀    ▀▀▀ '▀▀▀▀▀  ▀▀    ▀▀`",
    "     ▀▓▓▓▓▓▓▓▓▀▀ ",
    "",
]


class Console:
    """Styled terminal output.

    Attributes:
        term (Terminal): Blessed terminal used for colors and cursor moves
        divider_length (int): Width of the channel divider
        colors (dict): Style name to blessed formatter name
    """

    logger = logging.getLogger(__name__)

    COLORS = {
        'default': 'white',
        'echo': 'cyan',
        'public': 'blue',
        'whisper': 'magenta',
        'server': 'green',
        'prompt': 'yellow',
        'divider': 'bold_yellow',
    }

    REPLY_STYLES = {
        Public: 'public',
        WhisperReply: 'whisper',
        Server: 'server',
    }

    def __init__(self, term=None, divider_length=35, colors=None):
        """Initialize the console.

        Args:
            term (Terminal): Terminal to draw on, defaults to stdout
            divider_length (int): Width of the channel divider
            colors (dict): Overrides for COLORS
        """
        self.term = term or Terminal()
        self.divider_length = divider_length
        self.colors = dict(self.COLORS)
        self.colors.update(colors or {})
        self._lock = threading.Lock()

    def style(self, name, text):
        """Apply a named style to text.

        Args:
            name (str): Key of self.colors
            text (str): Text to style

        Returns:
            str: Styled text
        """
        color = self.colors.get(name, self.colors['default'])
        color_func = getattr(self.term, color, self.term.white)
        return color_func(text)

    def divider_text(self, channel=None):
        """Build the divider line for a channel.

        Args:
            channel (str): Channel name, or None for a plain rule

        Returns:
            str: Unstyled divider
        """
        if channel is None:
            return '-' * self.divider_length
        dashes = max(0, self.divider_length - 2 - len(channel))
        return '[' + channel + ']' + '-' * dashes

    def write(self, text):
        """Write text in one piece and flush."""
        with self._lock:
            self.term.stream.write(text)
            self.term.stream.flush()

    def _line(self, name, text):
        return self.style(name, text) + self.term.normal + '\n'

    def divider(self, channel=None):
        """Print the divider below the last message."""
        self.write(self._line('divider', self.divider_text(channel)))

    def redraw(self, channel):
        """Redraw the divider in place after a line that was not sent.

        Clears the line the user just typed.
        """
        self.write(
            self.term.move_up(2) + self.term.move_x(0) + self.term.clear_eol
            + self._line('divider', self.divider_text(channel))
            + self.term.clear_eol
        )

    def sent(self, username, text, channel):
        """Replace the divider and the typed line with the sent message.

        The echo and the new divider are one write, so a reply from the
        server cannot land between them.

        Args:
            username (str): Name shown before the text
            text (str): Line as typed
            channel (str): Channel shown in the divider
        """
        self.write(
            self.term.move_up(2) + self.term.move_x(0) + self.term.clear_eol
            + self._line('echo', f'{username}: {text}')
            + self.term.clear_eol
            + self._line('divider', self.divider_text(channel))
        )

    def reply(self, reply, channel):
        """Print a server reply above the input line and redraw the divider.

        Args:
            reply (Public | WhisperReply | Server): Parsed reply
            channel (str): Channel shown in the divider
        """
        name = self.REPLY_STYLES.get(type(reply), 'public')
        self.write(
            self.term.move_up(1) + self.term.move_x(0) + self.term.clear_eol
            + self._line(name, reply.text)
            + self._line('divider', self.divider_text(channel))
        )

    def notice(self, text):
        """Print a notification from the client itself."""
        self.write(self._line('server', f'[Server]: {text}'))

    def prompt(self, text):
        """Print a prompt before reading a line."""
        self.write(self._line('prompt', text))

    def welcome(self, username):
        """Print the welcome notice, banner and a plain divider."""
        self.notice(f'hey {username} welcome to Shlλck!')
        self.write('\n'.join(BANNER) + '\n')
        self.divider()

    def goodbye(self):
        """Reset terminal attributes and say goodbye."""
        self.write(self.term.normal + 'Goodbye!\n')


class InputLines:
    """Lines typed on stdin, readable from asyncio.

    A daemon thread blocks on stdin and hands each line to the event
    loop, so a pending read never keeps the process alive on exit.
    """

    logger = logging.getLogger(__name__)

    def __init__(self, stream=None, loop=None):
        self.stream = stream or sys.stdin
        self.loop = loop or asyncio.get_running_loop()
        self.queue = asyncio.Queue()
        self.thread = threading.Thread(
            target=self._read, name='stdin', daemon=True
        )

    def start(self):
        self.thread.start()
        return self

    def _read(self):
        while True:
            try:
                line = self.stream.readline()
            except (OSError, ValueError) as ex:
                self.logger.error('stdin: %r', ex)
                line = ''
            if not line:
                self._put(None)
                return
            if not self._put(line.rstrip('\r\n')):
                return

    def _put(self, item):
        try:
            self.loop.call_soon_threadsafe(self.queue.put_nowait, item)
        except RuntimeError:
            # event loop already closed
            return False
        return True

    async def readline(self):
        """Get the next line without its newline, or None at end of input."""
        return await self.queue.get()
