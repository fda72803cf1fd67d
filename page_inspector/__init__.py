"""
Page Inspector - checks every resource a web page references.

This package fetches a page, discovers the scripts, images, stylesheets,
media and CSS url() references it loads, and probes each of them for
reachability, status, content type, size and latency.
"""

__version__ = "1.0.0"
__author__ = "Page Inspector Team"
