"""Calculator version, stamped on every result."""

VERSION = "2025.06.1"
