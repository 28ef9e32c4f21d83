"""Parts for network servers: properties and INI loading, queued logging, MD5 digests, message handlers and IPv4 addresses."""

__version__ = "0.1.0"