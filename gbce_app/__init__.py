"""
GBCE App - Global Beverage Corporation Exchange trade indicators

Records trades into an in-memory ledger fronted by a short-lived, TTL-evicted
recent-trades cache, and computes dividend yield, P/E ratio, volume weighted
stock price and the GBCE All Share Index from them.
"""

__version__ = "0.1.0"
__author__ = "GBCE Team"
