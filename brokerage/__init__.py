"""
Brokerage Back-Office

Backend for a real-estate brokerage's marketing site and admin area:
property listings, representatives, site copy, contact and newsletter
leads, and session-based admin authentication.
"""

__version__ = "0.1.0"
