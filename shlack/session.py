#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import logging
import threading


class SessionState:
    """Channel the user is currently in.

    Shared by the inbound and outbound loops of one client.

    Attributes
    ----------
    default_channel : `str`
        Channel at session start.
    """
    logger = logging.getLogger(__name__)

    def __init__(self, default_channel):
        self.default_channel = default_channel
        self._channel = default_channel
        self._lock = threading.Lock()

    def __repr__(self):
        return '<SessionState %s>' % self.read()

    def read(self):
        """Get the current channel.

        Returns
        -------
        `str`
        """
        with self._lock:
            return self._channel

    def swap(self, channel):
        """Replace the current channel.

        Parameters
        ----------
        channel : `str`
            New channel.

        Returns
        -------
        `str`
            Previous channel.
        """
        with self._lock:
            old, self._channel = self._channel, channel
        self.logger.info('channel %s -> %s', old, channel)
        return old
