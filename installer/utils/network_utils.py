"""主机地址校验工具."""

from __future__ import annotations

import ipaddress
import re

from installer.constants.validation_limits import HOSTNAME_LABEL_MAX_LENGTH, HOSTNAME_MAX_LENGTH

_HOSTNAME_LABEL_PATTERN = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")


def is_valid_hostname(host: str) -> bool:
    """按 RFC 1123 校验主机名, 允许末尾的根域点号.

    每个标签只能包含字母、数字和连字符, 且不能以连字符开头或结尾.
    """
    if not host:
        return False
    name = host[:-1] if host.endswith(".") else host
    if not name or len(name) > HOSTNAME_MAX_LENGTH:
        return False
    return all(
        len(label) <= HOSTNAME_LABEL_MAX_LENGTH and _HOSTNAME_LABEL_PATTERN.fullmatch(label)
        for label in name.split(".")
    )


def is_valid_ip(host: str) -> bool:
    """校验 IPv4/IPv6 字面量(不接受 IPv6 zone id)."""
    if not host or "%" in host:
        return False
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def is_valid_host(host: object) -> bool:
    """主机名、IP 字面量或 `localhost` 之一即视为有效.

    字符串 "0" 与空值同等对待, 判为无效.
    """
    if not isinstance(host, str) or host == "0":
        return False
    return host == "localhost" or is_valid_hostname(host) or is_valid_ip(host)


__all__ = ["is_valid_host", "is_valid_hostname", "is_valid_ip"]
