"""HTTP surface: router assembly and service dependencies."""
