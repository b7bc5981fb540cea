# ABOUTME: Core search pipeline: offer-to-book join, orchestration, and result caching.
# ABOUTME: Nothing here performs I/O directly; providers are injected.
