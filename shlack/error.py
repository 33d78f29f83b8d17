#!/usr/bin/env python3
# -*- coding: utf-8 -*-
class ShlackError(Exception):
    ''' Base class for all exceptions in the shlack package '''

class ConfigError(ShlackError):
    ''' Exception raised when the client configuration is invalid '''

class TransportError(ShlackError):
    ''' Base class for all exceptions raised by the server connection '''

class ConnectionFailed(TransportError):
    ''' Exception raised when the connection to the server fails '''

class ConnectionClosed(TransportError):
    ''' Exception raised when the connection to the server is lost '''
