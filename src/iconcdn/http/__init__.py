"""HTTP primitives — immutable request, response, headers and query types."""
