"""PlainWiki: a minimal plain-text wiki."""
