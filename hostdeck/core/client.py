from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import socket

import paramiko

from .constants import DEFAULT_SSH_PORT, DEFAULT_SSH_TIMEOUT, DEFAULT_TERM, DEFAULT_TERM_SIZE
from .exceptions import ConnectionError
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class ClientConfig:
    host: str
    user: str
    port: int = DEFAULT_SSH_PORT
    password: Optional[str] = None
    timeout: float = DEFAULT_SSH_TIMEOUT


class RemoteClient:
    """
    封装 Paramiko SSHClient：
    - 显式保存 host / user / port
    - 密码登录，失败统一抛出 ConnectionError
    - 提供 sftp / 交互式 shell 辅助方法
    - 支持 with 上下文管理
    """
    def __init__(
        self,
        host: str,
        user: str,
        port: int = DEFAULT_SSH_PORT,
        password: Optional[str] = None,
        timeout: float = DEFAULT_SSH_TIMEOUT,
    ) -> None:
        self.config = ClientConfig(
            host=host,
            user=user,
            port=port,
            password=password,
            timeout=timeout,
        )

        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        # SFTP 连接缓存
        self._sftp: Optional[paramiko.SFTPClient] = None

    # --------------------
    # Connection management
    # --------------------
    def connect(self) -> None:
        """建立连接，失败时抛出 ConnectionError"""
        cfg = self.config
        logger.info("Connecting to %s@%s:%d", cfg.user, cfg.host, cfg.port)
        try:
            self.client.connect(
                hostname=cfg.host,
                port=cfg.port,
                username=cfg.user,
                password=cfg.password,
                timeout=cfg.timeout,
                allow_agent=not cfg.password,
                look_for_keys=not cfg.password,
            )
        except paramiko.AuthenticationException as e:
            raise ConnectionError(f"authentication failed for {cfg.user}@{cfg.host}") from e
        except (paramiko.SSHException, socket.error) as e:
            raise ConnectionError(f"failed to connect to {cfg.host}:{cfg.port}: {e}") from e

    # --------------------
    # Helpers
    # --------------------
    def open_sftp(self) -> paramiko.SFTPClient:
        """返回 SFTP 客户端，复用已有连接"""
        if self._sftp is None or self._sftp.get_channel() is None:
            try:
                self._sftp = self.client.open_sftp()
            except paramiko.SSHException as e:
                raise ConnectionError(f"failed to open SFTP session: {e}") from e
        return self._sftp

    def invoke_shell(
        self,
        term: str = DEFAULT_TERM,
        width: int = DEFAULT_TERM_SIZE[0],
        height: int = DEFAULT_TERM_SIZE[1],
    ) -> paramiko.Channel:
        """申请 PTY 并打开交互式 shell"""
        try:
            return self.client.invoke_shell(term=term, width=width, height=height)
        except paramiko.SSHException as e:
            raise ConnectionError(f"failed to start shell: {e}") from e

    def close(self) -> None:
        if self._sftp:
            try:
                self._sftp.close()
            except (OSError, paramiko.SSHException) as e:
                logger.debug("Ignoring SFTP close failure: %s", e)
            self._sftp = None
        self.client.close()

    # --------------------
    # Context manager
    # --------------------
    def __enter__(self) -> RemoteClient:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
