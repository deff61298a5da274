"""Console presentation, notifications and CLI for xcodearchive."""
