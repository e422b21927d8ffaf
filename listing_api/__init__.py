"""
Property Listing API.
REST layer over a document-style property store with a cache-aside read path.
"""

__version__ = "1.0.0"
