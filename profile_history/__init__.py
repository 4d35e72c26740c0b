"""
Profile history service.

Tracks recently opened (profile, app) pairs for a launcher extension,
supports starring favorites and answers recency queries.
"""

__version__ = "1.0.0"
