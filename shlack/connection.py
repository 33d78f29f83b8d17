#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import asyncio
import logging

from .error import ConnectionFailed, ConnectionClosed


class Connection:
    """Line-oriented connection to a chat server.

    Attributes
    ----------
    host : `str`
    port : `int`
    reader : `asyncio.StreamReader`
    writer : `asyncio.StreamWriter`
    closed : `bool`
    """
    logger = logging.getLogger(__name__)

    ENCODING = 'utf-8'
    LINE_LIMIT = 2 ** 20

    def __init__(self, host, port, reader, writer):
        self.host = host
        self.port = port
        self.reader = reader
        self.writer = writer
        self.closed = False

    def __repr__(self):
        return '<Connection %s:%s>' % (self.host, self.port)

    @classmethod
    async def connect(cls, host, port):
        """Open a connection.

        Parameters
        ----------
        host : `str`
        port : `int`

        Returns
        -------
        `shlack.connection.Connection`

        Raises
        ------
        shlack.error.ConnectionFailed
        """
        cls.logger.info('connect %s:%s', host, port)
        try:
            reader, writer = await asyncio.open_connection(
                host, port, limit=cls.LINE_LIMIT
            )
        except (OSError, OverflowError, UnicodeError) as ex:
            # Bad ports and host names surface as OverflowError / UnicodeError
            cls.logger.info('connect %s:%s: %r', host, port, ex)
            raise ConnectionFailed(
                'could not connect to %s:%s: %s' % (host, port, ex)
            ) from ex
        return cls(host, port, reader, writer)

    async def send(self, frame):
        """Send one frame and wait until it is flushed.

        Parameters
        ----------
        frame : `str`
            Frame without the line terminator.

        Raises
        ------
        shlack.error.ConnectionClosed
        """
        if self.closed:
            raise ConnectionClosed('connection is closed')
        self.logger.debug('send %s', frame)
        try:
            self.writer.write((frame + '\n').encode(self.ENCODING))
            await self.writer.drain()
        except OSError as ex:
            self.logger.info('send %s: %r', self, ex)
            raise ConnectionClosed(str(ex)) from ex

    async def recv(self):
        """Receive one line.

        Returns
        -------
        `None` or `str`
            Line without the terminator, `None` at end of stream.

        Raises
        ------
        shlack.error.ConnectionClosed
        """
        try:
            data = await self._readline()
        except OSError as ex:
            self.logger.info('recv %s: %r', self, ex)
            raise ConnectionClosed(str(ex)) from ex
        if not data:
            self.logger.info('end of stream %s', self)
            return None
        line = data.decode(self.ENCODING, errors='replace').rstrip('\r\n')
        self.logger.debug('recv %s', line)
        return line

    async def _readline(self):
        try:
            return await self.reader.readuntil(b'\n')
        except asyncio.IncompleteReadError as ex:
            return ex.partial
        except asyncio.LimitOverrunError as ex:
            head = await self.reader.readexactly(ex.consumed)
        self.logger.warning('recv %s: line over %d bytes truncated',
                            self, self.LINE_LIMIT)
        # Drop the rest of the line
        while True:
            try:
                await self.reader.readuntil(b'\n')
                break
            except asyncio.IncompleteReadError:
                break
            except asyncio.LimitOverrunError as ex:
                await self.reader.readexactly(ex.consumed)
        return head[:self.LINE_LIMIT]

    async def close(self):
        """Close the connection. Closing twice does nothing."""
        if self.closed:
            return
        self.closed = True
        self.logger.info('close %s', self)
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as ex:
            self.logger.warning('close %s: %r', self, ex)
