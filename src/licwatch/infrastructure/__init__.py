"""Infrastructure layer — host-store adapter backed by SQLite."""
