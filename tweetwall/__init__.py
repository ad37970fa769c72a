"""
tweetwall package
-----------------
Latest charity tweet photo as a full-screen, auto-refreshing web page.
Contains the configuration store (discovery, merge, conversion), a thin
tweet search client, logging setup and the HTTP API.
"""

__version__ = "0.3.0"
