"""fbtoken CLI - Command-line interface for the Firebase token helper."""
