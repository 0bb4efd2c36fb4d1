"""Application services orchestrating repositories and infrastructure ports."""
