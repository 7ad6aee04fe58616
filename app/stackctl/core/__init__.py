"""Core logic: configuration, paths, theme, component order, engine and preflight."""
