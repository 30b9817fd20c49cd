"""
forwardhook - reshape incoming JSON webhooks and forward them upstream.
"""

__version__ = "0.1.0"
