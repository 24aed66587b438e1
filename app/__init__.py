"""Campus complaint portal service."""
