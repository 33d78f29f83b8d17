#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import asyncio
import logging

from .codec import encode, parse_input, parse_reply
from .message import Login, Logout, Cmd, JoinChannel


class Client:
    """Chat client session.

    Runs two loops on one connection: the outbound loop sends what the
    user types, the inbound loop renders what the server sends. They
    share only the session state and the console.

    Attributes
    ----------
    connection : `shlack.connection.Connection`
        Server connection.
    username : `str`
        Name sent at login.
    state : `shlack.session.SessionState`
        Current channel.
    console : `object`
        Terminal output, see `terminal.console.Console`.
    lines : `object`
        Input source with an ``async readline()`` returning `str`,
        or `None` at end of input.
    """
    logger = logging.getLogger(__name__)

    def __init__(self, connection, username, state, console, lines):
        self.connection = connection
        self.username = username
        self.state = state
        self.console = console
        self.lines = lines

    async def login(self):
        """Send the login frame.

        Raises
        ------
        shlack.error.ConnectionClosed
        """
        self.logger.info('login %s', self.username)
        await self.connection.send(encode(Login(self.username)))

    async def outbound_loop(self):
        """Read user input and send it until logout or end of input.

        Raises
        ------
        shlack.error.ConnectionClosed
        """
        while True:
            line = await self.lines.readline()
            if line is None:
                self.logger.info('end of input')
                return

            msg = parse_input(line)
            if msg is None:
                self.console.redraw(self.state.read())
                continue
            if isinstance(msg, Logout):
                self.logger.info('logout')
                return

            joining = isinstance(msg, Cmd) and isinstance(msg.command, JoinChannel)
            channel = msg.command.name if joining else self.state.read()

            # Echo and divider go out in one write before send can yield
            self.console.sent(self.username, line, channel)
            await self.connection.send(encode(msg))
            if joining:
                self.state.swap(channel)

    async def inbound_loop(self):
        """Render server replies until the server closes the connection.

        Raises
        ------
        shlack.error.ConnectionClosed
        """
        while True:
            line = await self.connection.recv()
            if line is None:
                return
            self.console.reply(parse_reply(line), self.state.read())

    async def run(self):
        """Log in and run both loops.

        Returns when the user logs out or the server closes the
        connection. The connection is closed on return.

        Raises
        ------
        shlack.error.ConnectionClosed
        """
        outbound = inbound = None
        try:
            await self.login()
            self.console.divider(self.state.read())

            outbound = asyncio.create_task(self.outbound_loop())
            inbound = asyncio.create_task(self.inbound_loop())
            done, _ = await asyncio.wait(
                [outbound, inbound],
                return_when=asyncio.FIRST_COMPLETED
            )
            await self._cancel(outbound, inbound)

            for task in done:
                task.result()
            if outbound not in done:
                self.logger.info('connection closed by server')
                self.console.notice('connection closed by server')
        finally:
            await self._cancel(outbound, inbound)
            await self.connection.close()

    @staticmethod
    async def _cancel(*tasks):
        for task in tasks:
            if task is None or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
