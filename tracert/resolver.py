# tracert/resolver.py
import ipaddress
import logging
import socket

from tracert.errors import ResolutionFailure

logger = logging.getLogger(__name__)


def resolve_destination(destination: str) -> str:
    """Return the first IPv4 address for a host name or literal address."""
    try:
        return str(ipaddress.IPv4Address(destination))
    except ValueError:
        pass
    try:
        infos = socket.getaddrinfo(destination, None, socket.AF_INET)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionFailure(destination) from e
    if not infos:
        raise ResolutionFailure(destination)
    address = infos[0][4][0]
    logger.debug("resolved %s -> %s", destination, address)
    return address


def reverse_lookup(address: str) -> str | None:
    """PTR name for address, or None when there is none."""
    try:
        return socket.gethostbyaddr(address)[0]
    except OSError:
        return None
