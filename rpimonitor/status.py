"""
Host status lookups.

StatusProvider is the contract the refresh loop uses; HostStatus
implements it for the local machine. Lookups never raise: a failure is
logged and the value degrades to an empty string so the frame still
gets drawn.
"""
import logging
import socket

import psutil

logger = logging.getLogger(__name__)


class StatusProvider:
    """Source of the strings shown on the panel."""

    def hostname(self) -> str:
        raise NotImplementedError

    def ipv4(self, interface: str) -> str:
        raise NotImplementedError


class HostStatus(StatusProvider):
    """Hostname from the kernel, addresses from psutil."""

    def hostname(self) -> str:
        try:
            name = socket.gethostname()
        except OSError as e:
            logger.warning("error getting hostname: %s", e)
            return ""
        logger.debug("Hostname: %s", name)
        return name

    def ipv4(self, interface: str) -> str:
        """
        Last non-loopback IPv4 address of interface.

        Returns:
            Dotted quad, or "" if the interface is missing or has none
        """
        try:
            addrs = psutil.net_if_addrs().get(interface)
        except (OSError, RuntimeError) as e:
            logger.warning("error listing addresses of %s: %s", interface, e)
            return ""
        if not addrs:
            logger.debug("interface %s not found", interface)
            return ""

        ip = ""
        for addr in addrs:
            if addr.family == socket.AF_INET and not addr.address.startswith("127."):
                ip = addr.address
        return ip


def format_status(hostname: str, ipv4: str) -> str:
    """
    Status line text.

        format_status("pi", "10.0.0.2")  -> "pi (10.0.0.2)"
        format_status("pi", "")          -> "pi"
        format_status("", "10.0.0.2")    -> "(10.0.0.2)"
    """
    if ipv4:
        return f"{hostname} ({ipv4})" if hostname else f"({ipv4})"
    return hostname
