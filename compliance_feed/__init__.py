"""Per-identity notification feed and document status synchronization."""
