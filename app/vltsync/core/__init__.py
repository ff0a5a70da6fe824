"""Core infrastructure: paths, configuration, registry and theming."""
