# ABOUTME: Bookprice - book price comparison across a catalog and a pricing source.
# ABOUTME: Joins Open Library metadata with Google Books offers by normalized ISBN.

__version__ = "0.1.0"
