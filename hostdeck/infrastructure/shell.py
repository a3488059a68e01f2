"""
Interactive remote terminal over an SSH channel (POSIX terminals)
"""
import os
import queue
import select
import shutil
import signal
import socket
import sys
import termios
import threading
import tty
from typing import Optional, TextIO, Tuple

import paramiko

from ..core.client import RemoteClient
from ..core.constants import DEFAULT_TERM, DEFAULT_TERM_SIZE
from ..core.logging import get_logger

logger = get_logger(__name__)

BUFFER_SIZE = 4096


def terminal_size() -> Tuple[int, int]:
    size = shutil.get_terminal_size(DEFAULT_TERM_SIZE)
    return size.columns, size.lines


class ResizeForwarder:
    """
    Forward local SIGWINCH to the remote PTY.

    The signal handler only enqueues; a daemon thread does the
    ``resize_pty`` call so nothing blocks inside the handler.
    """

    def __init__(self, channel: paramiko.Channel):
        self.channel = channel
        self._queue: "queue.Queue[Optional[Tuple[int, int]]]" = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="pty-resize", daemon=True)
        self._previous_handler = None

    def start(self) -> None:
        self._previous_handler = signal.signal(signal.SIGWINCH, self._on_signal)
        self._thread.start()

    def stop(self) -> None:
        if self._previous_handler is not None:
            signal.signal(signal.SIGWINCH, self._previous_handler)
        if self._thread.is_alive():
            self._queue.put(None)
            self._thread.join(timeout=1)

    def _on_signal(self, signum, frame) -> None:
        self._queue.put(terminal_size())

    def _run(self) -> None:
        while True:
            size = self._queue.get()
            if size is None:
                return
            try:
                self.channel.resize_pty(width=size[0], height=size[1])
            except (paramiko.SSHException, OSError) as e:
                logger.debug("Resize not forwarded: %s", e)


def run_shell(
    client: RemoteClient,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> Optional[int]:
    """
    Bridge the local terminal to a remote login shell until it exits.

    Returns:
        The remote exit status, if the server reported one
    """
    width, height = terminal_size()
    channel = client.invoke_shell(term=DEFAULT_TERM, width=width, height=height)
    forwarder = ResizeForwarder(channel)

    in_fd = stdin.fileno()
    out_fd = stdout.fileno()
    saved_attrs = termios.tcgetattr(in_fd)
    try:
        tty.setraw(in_fd)
        channel.settimeout(0.0)
        forwarder.start()
        while True:
            readable, _, _ = select.select([channel, in_fd], [], [])
            if channel in readable:
                try:
                    data = channel.recv(BUFFER_SIZE)
                except socket.timeout:
                    continue
                if not data:
                    break
                os.write(out_fd, data)
            if in_fd in readable:
                data = os.read(in_fd, BUFFER_SIZE)
                if not data:
                    break
                channel.sendall(data)
    finally:
        termios.tcsetattr(in_fd, termios.TCSADRAIN, saved_attrs)
        forwarder.stop()

    status = channel.recv_exit_status() if channel.exit_status_ready() else None
    channel.close()
    logger.info("Remote shell closed (exit status %s)", status)
    return status
