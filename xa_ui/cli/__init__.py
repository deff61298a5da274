"""CLI entry points for xcodearchive."""
