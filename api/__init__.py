"""HTTP surface of the JusticeAlly service."""
