"""Customer Management API — customers and their addresses over a relational store."""
