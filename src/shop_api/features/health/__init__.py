"""Service liveness and readiness."""
