"""Read access to the audit trail."""
