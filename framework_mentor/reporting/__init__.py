"""Plain-text terminal formatters used by the CLI."""
