import ipaddress
import logging


def _ip_address(value):
    """
    Parse `value` as a plain IPv4/IPv6 address.

    Returns the ipaddress object, or None if `value` is not one. Zoned IPv6
    addresses like "fe80::1%eth0" are rejected.
    """
    if not value or "%" in value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def _is_ip(value):
    return _ip_address(value) is not None


def parse_ip(value):
    """
    Normalize an IP address string.

    Returns:
        The canonical form of a valid IPv4/IPv6 address, or "" if `value`
        is not one.
    """
    ip_obj = _ip_address((value or "").strip())
    return str(ip_obj) if ip_obj is not None else ""


def split_host_port(addr):
    """
    Split "host:port" or "[v6host]:port" into (host, port).

    Returns None when there is no port, e.g. "203.0.113.7" or "::1".
    """
    addr = (addr or "").strip()
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or not addr[end + 1:].startswith(":"):
            return None
        host, port = addr[1:end], addr[end + 2:]
    else:
        host, sep, port = addr.rpartition(":")
        # More than one colon without brackets is a bare IPv6 address.
        if not sep or ":" in host:
            return None
    if ":" in port:
        return None
    return host, port


def client_ip(forwarded_for, peer_address):
    """
    Gets the real IP address of the visitor.

    When the server sits behind a proxy or load balancer, the peer address is
    the proxy's. Proxies pass the original visitor along in X-Forwarded-For
    ("client, proxy1, proxy2"), so that header is checked first.

    Priority:
      1. First entry of `forwarded_for` that is a valid IP (trimmed).
      2. Host part of `peer_address` if it is "host:port" with a valid IP host.
      3. `peer_address` itself if it is a bare IP.
      4. "".
    """
    # 1) X-Forwarded-For can hold several IPs: "client, proxy1, proxy2".
    #    Proxies or clients sometimes put junk first ("unknown"), so skip
    #    entries until one parses as an IP.
    if forwarded_for:
        for part in forwarded_for.split(","):
            part = part.strip()
            if _is_ip(part):
                return part

    # 2) No usable header: fall back to the connection peer, usually "host:port".
    hostport = split_host_port(peer_address)
    if hostport and _is_ip(hostport[0]):
        return hostport[0]

    # 3) Some servers hand us the peer without a port. parse_ip returns ""
    #    when even that fails (step 4).
    return parse_ip(peer_address)


def first_lang(accept_language):
    """Return the first tag of an Accept-Language list ("es-CR,en;q=0.8" -> "es-CR")."""
    accept_language = (accept_language or "").strip()
    if not accept_language:
        return ""
    return accept_language.split(",", 1)[0]


def parse_networks(value):
    """
    Parse a comma-separated list of IPs and CIDR ranges.

    Invalid items are logged and skipped. Single IPs become /32 (or /128)
    networks.
    """
    networks = []
    for raw in (value or "").split(","):
        item = raw.strip()
        if not item:
            continue
        try:
            networks.append(ipaddress.ip_network(item, strict=False))
        except ValueError:
            logging.warning(f"Invalid IP or CIDR in TRUSTED_CDN_NETWORKS: '{item}'")
    return networks


def is_trusted_edge(peer_ip, networks):
    """True if no networks are configured, or `peer_ip` is inside one of them."""
    if not networks:
        return True
    ip_obj = _ip_address((peer_ip or "").strip())
    if ip_obj is None:
        return False
    return any(ip_obj in net for net in networks)
