"""User-facing front-ends for the Showcase browser core."""
