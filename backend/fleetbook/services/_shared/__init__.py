"""Cross-cutting service building blocks (errors, ports, unit-of-work base)."""
