#!/usr/bin/env python3
"""Shlack terminal client entry point.

Prompts for the server and a username, connects, logs in and hands the
session over to `shlack.Client`.

Usage:
    python -m terminal.client [config.json] [--host HOST] [--port PORT]
                              [--user NAME] [--log-level LEVEL]
"""

import sys
import asyncio
import logging
import argparse

from shlack import Client, Connection, SessionState
from shlack.error import ShlackError, ConfigError

from common import get_config, configure_logger, resolve_host
from common.config import get_log_level

from .console import Console, InputLines


logger = logging.getLogger(__name__)

LOGGERS = ('shlack', 'terminal')


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv (list): Arguments without the program name, defaults to sys.argv

    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog='shlack-client',
        description='Terminal chat client for Shlack servers'
    )
    parser.add_argument('config', nargs='?', default=None,
                        help='JSON config file')
    parser.add_argument('--host', default=None,
                        help='server address, skips the prompt')
    parser.add_argument('--port', type=int, default=None,
                        help='server port (default 4040)')
    parser.add_argument('--user', default=None,
                        help='username, skips the prompt')
    parser.add_argument('--log-level', default=None,
                        help='debug, info, warning or error')
    return parser.parse_args(argv)


async def run_client(conf, console, lines=None, ask_host=True):
    """Run the startup sequence and one chat session.

    Args:
        conf (dict): Configuration from get_config
        console (Console): Terminal output
        lines (InputLines): Input source, defaults to stdin
        ask_host (bool): Prompt for the server address

    Raises:
        ShlackError: If the connection fails or is lost
    """
    if lines is None:
        lines = InputLines().start()

    host = conf['host']
    if ask_host:
        console.prompt('Enter server IP')
        host = resolve_host(await lines.readline() or '', host)

    console.notice(f'connecting to: {host}')
    connection = await Connection.connect(host, conf['port'])

    try:
        username = conf['username']
        while not username:
            console.prompt('Enter username')
            entered = await lines.readline()
            if entered is None:
                logger.info('no username entered')
                return
            username = entered.strip()

        console.welcome(username)
        client = Client(
            connection,
            username,
            SessionState(conf['default_channel']),
            console,
            lines
        )
        await client.run()
    finally:
        await connection.close()


def main(argv=None):
    """Main entry point for the terminal client.

    Returns:
        int: Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)

    try:
        conf = get_config(
            args.config,
            host=args.host,
            port=args.port,
            username=args.user,
            log_level=args.log_level
        )
    except ConfigError as ex:
        print(f'Configuration error: {ex}', file=sys.stderr)
        return 1

    # Library and terminal app loggers, the root logger is left alone
    for name in LOGGERS:
        configure_logger(
            name,
            log_file=conf['log_file'],
            log_format=conf['log_format'],
            log_level=get_log_level(conf['log_level'])
        )

    console = Console(
        divider_length=conf['divider_length'],
        colors=conf['colors']
    )

    try:
        asyncio.run(run_client(conf, console, ask_host=args.host is None))
        return 0
    except KeyboardInterrupt:
        return 0
    except ShlackError as ex:
        logger.error('session ended: %r', ex)
        print(f'\nConnection error: {ex}', file=sys.stderr)
        return 1
    finally:
        console.goodbye()


if __name__ == '__main__':
    sys.exit(main())
